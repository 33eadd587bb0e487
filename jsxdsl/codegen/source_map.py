"""
Position mapping between generated output lines and DSL source lines.

A PositionMap renders as a Source Map v3 document. Mappings are line
granular: every segment starts at column 0 of both files.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Tuple


BASE64_DIGITS = 'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/'
VLQ_SHIFT = 5
VLQ_CONTINUATION_BIT = 1 << VLQ_SHIFT
VLQ_MASK = VLQ_CONTINUATION_BIT - 1

SOURCE_MAP_VERSION = 3


def encode_vlq(value: int) -> str:
    """Encode one integer as base64 VLQ (sign in the lowest bit)."""
    vlq = ((-value) << 1) | 1 if value < 0 else value << 1
    encoded = ''
    while True:
        digit = vlq & VLQ_MASK
        vlq >>= VLQ_SHIFT
        if vlq:
            digit |= VLQ_CONTINUATION_BIT
        encoded += BASE64_DIGITS[digit]
        if not vlq:
            return encoded


@dataclass
class PositionMap:
    """Maps 1-based generated lines to 1-based source lines."""
    file: str
    source: str
    mappings: List[Tuple[int, int]] = field(default_factory=list)

    def add_mapping(self, generated_line: int, original_line: int) -> None:
        self.mappings.append((generated_line, original_line))

    def encode_mappings(self) -> str:
        """Render the ``mappings`` field: ';' between lines, ',' between segments."""
        by_line: Dict[int, List[int]] = {}
        for generated_line, original_line in sorted(self.mappings):
            by_line.setdefault(generated_line, []).append(original_line)

        last_line = max(by_line) if by_line else 0
        previous_original = 0
        groups = []
        for generated_line in range(1, last_line + 1):
            segments = []
            for original_line in by_line.get(generated_line, []):
                # [column, source index, original line, original column], all relative
                original = original_line - 1
                segments.append(
                    encode_vlq(0) + encode_vlq(0)
                    + encode_vlq(original - previous_original) + encode_vlq(0)
                )
                previous_original = original
            groups.append(','.join(segments))
        return ';'.join(groups)

    def to_dict(self) -> dict:
        return {
            'version': SOURCE_MAP_VERSION,
            'file': self.file,
            'sources': [self.source],
            'names': [],
            'mappings': self.encode_mappings(),
        }

    def to_json(self) -> str:
        """Serialize as a Source Map v3 JSON document."""
        return json.dumps(self.to_dict())
