"""
Tests for Moonshine model classes.

Test Organization:
1. Enums: MashType, MashStatus, RelationType, EdgeSource
2. Mash and Edge validation
3. ToolResult envelope
"""

import pytest
from pydantic import BaseModel, ValidationError

from moonshine.models import (
    Edge,
    EdgeSource,
    ErrorKind,
    Mash,
    MashStatus,
    MashType,
    RelationType,
    ToolResult,
)


class TestEnums:
    """Tests for stored enum values."""

    def test_mash_type_values(self):
        """Test types are stored as Korean labels."""
        assert [t.value for t in MashType] == ["결정", "문제", "인사이트", "질문"]
        assert MashType("인사이트") is MashType.INSIGHT

    def test_mash_status_values(self):
        """Test the six pipeline statuses."""
        assert {s.value for s in MashStatus} == {
            "MASH_TUN",
            "ON_STILL",
            "DISTILLED",
            "JARRED",
            "RE_EMBED",
            "RE_EXTRACT",
        }

    def test_edge_enums(self):
        """Test relation types and sources."""
        assert {r.value for r in RelationType} == {"RELATED_TO", "SUPPORTS", "CONFLICTS_WITH"}
        assert EdgeSource("ai") is EdgeSource.AI


class TestMash:
    """Tests for Mash model."""

    def test_from_row(self):
        """Test building from a database row dict."""
        mash = Mash(
            id="m-1",
            type="문제",
            status="ON_STILL",
            summary="빌드가 느리다",
            created_at=1,
            updated_at=2,
        )

        assert mash.type == MashType.PROBLEM
        assert mash.status == MashStatus.ON_STILL
        assert mash.context == ""
        assert mash.memo == ""

    def test_empty_summary(self):
        """Test summary must not be empty."""
        with pytest.raises(ValidationError):
            Mash(id="m", type="결정", status="JARRED", summary="", created_at=1, updated_at=1)

    def test_unknown_type(self):
        """Test unknown type labels are rejected."""
        with pytest.raises(ValidationError):
            Mash(id="m", type="메모", status="JARRED", summary="x", created_at=1, updated_at=1)


class TestEdge:
    """Tests for Edge model."""

    def test_confidence_bounds(self):
        """Test confidence must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            Edge(
                id=1,
                source_id="a",
                target_id="b",
                relation_type="SUPPORTS",
                confidence=1.5,
                created_at=1,
                updated_at=1,
            )

    def test_defaults(self):
        """Test human provenance and zero confidence by default."""
        edge = Edge(
            id=1, source_id="a", target_id="b", relation_type="RELATED_TO", created_at=1, updated_at=1
        )

        assert edge.source == EdgeSource.HUMAN
        assert edge.confidence == 0.0


class TestToolResult:
    """Tests for the success/error envelope."""

    def test_success_dumps_models(self):
        """Test models and lists of models become JSON-ready dicts."""

        class Item(BaseModel):
            kind: MashType

        single = ToolResult.success(Item(kind=MashType.QUESTION))
        many = ToolResult.success([Item(kind=MashType.DECISION), {"raw": 1}])

        assert single.ok is True
        assert single.error is None
        assert single.data == {"kind": "질문"}
        assert many.data == [{"kind": "결정"}, {"raw": 1}]

    def test_failure(self):
        """Test error results carry kind and message and no data."""
        result = ToolResult.failure("not_found", "Mash not found: x")

        assert result.ok is False
        assert result.data is None
        assert result.error.kind == ErrorKind.NOT_FOUND
        assert result.to_text() == "Mash not found: x"

    def test_failure_rejects_unknown_kind(self):
        """Test error kinds are a closed set."""
        with pytest.raises(ValueError):
            ToolResult.failure("explosion", "boom")

    def test_success_text(self):
        """Test success text is indented JSON."""
        text = ToolResult.success({"total_mashes": 0}).to_text()

        assert text == '{\n  "total_mashes": 0\n}'
