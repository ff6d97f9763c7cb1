# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
YAML answer key exporter for word search puzzles.

Writes the solved grid and each word's start, direction and cells so a
puzzle can be checked or re-rendered without the images.
"""

from datetime import datetime
from typing import Any, Dict

import yaml

from models import PuzzleResult, PuzzleSpec


class AnswerExporter:
    """
    Exports puzzle answers to YAML.

    Usage:
        exporter = AnswerExporter()
        yaml_str = exporter.export(spec, result)
    """

    def build(self, spec: PuzzleSpec, result: PuzzleResult) -> Dict[str, Any]:
        """Build the plain dict that is serialised."""
        words = []
        for word, cells in result.placements.items():
            direction = result.directions.get(word)
            words.append({
                'word': word,
                'direction': direction.label if direction else None,
                'start': list(cells[0]) if cells else None,
                'cells': [list(position) for position in cells],
            })

        return {
            'puzzle': {
                'index': spec.index,
                'size': result.size,
                'word_count': len(result.placements),
                'generated_at': datetime.now().isoformat(timespec='seconds'),
            },
            'grid': ["".join(row) for row in result.grid.rows()],
            'words': words,
        }

    def export(self, spec: PuzzleSpec, result: PuzzleResult) -> str:
        """
        Export puzzle answers to a YAML string.

        Args:
            spec: The batch entry the puzzle came from
            result: The generated puzzle

        Returns:
            YAML document
        """
        header = f"# Word search answer key, puzzle {spec.index}\n"
        body = yaml.safe_dump(
            self.build(spec, result),
            default_flow_style=None,
            sort_keys=False,
            allow_unicode=True,
        )
        return header + body
