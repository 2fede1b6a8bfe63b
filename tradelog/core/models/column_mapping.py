"""
Column mapping model.

Maps semantic trade fields to header positions of an import file.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from tradelog.core.enums import MappingField

UNMAPPED = -1


@dataclass
class ColumnMapping:
    """Field name to column index assignment; -1 marks an unmapped field."""

    indices: dict[MappingField, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {mapping_field: UNMAPPED for mapping_field in MappingField}
        for key, index in self.indices.items():
            normalized[MappingField(key)] = int(index)
        self.indices = normalized

    def __getitem__(self, mapping_field: MappingField | str) -> int:
        return self.indices[MappingField(mapping_field)]

    def __setitem__(self, mapping_field: MappingField | str, index: int) -> None:
        self.indices[MappingField(mapping_field)] = int(index)

    def __iter__(self) -> Iterator[MappingField]:
        return iter(self.indices)

    def is_mapped(self, mapping_field: MappingField) -> bool:
        """Check if a field points at a column."""
        return self.indices[mapping_field] >= 0

    def missing_required(self) -> list[MappingField]:
        """Get required fields still unmapped, in detection order."""
        return [f for f in MappingField.required() if not self.is_mapped(f)]

    def out_of_range(self, column_count: int) -> list[MappingField]:
        """Get mapped fields whose index does not exist in the header row."""
        return [f for f, index in self.indices.items() if index >= column_count]

    def to_dict(self) -> dict[str, int]:
        """Convert mapping to a wire-friendly dictionary."""
        return {mapping_field.value: index for mapping_field, index in self.indices.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> "ColumnMapping":
        """Build a mapping from field names; unknown names raise ValueError."""
        return cls({MappingField(key): index for key, index in data.items()})

    @classmethod
    def from_header_names(
        cls, headers: list[str], assignments: Mapping[str, str]
    ) -> "ColumnMapping":
        """Build a mapping from field name to header text.

        Header text is matched exactly, ignoring case and surrounding spaces.

        Raises:
            ValueError: If a header text is not present
        """
        lookup = {header.strip().lower(): index for index, header in enumerate(headers)}
        indices: dict[MappingField, int] = {}
        for key, header in assignments.items():
            position = lookup.get(header.strip().lower())
            if position is None:
                raise ValueError(f"Column '{header}' not found. Available: {', '.join(headers)}")
            indices[MappingField(key)] = position
        return cls(indices)
