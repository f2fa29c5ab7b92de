"""Tests for the context pack models.

Covers:
- Defaults produce a structurally empty pack
- approx_text() part ordering, trimming and empty-part handling
- JSON loading via pydantic
"""

import pytest
from hypothesis import given

from contextgate.models.pack import (
    ContextPack,
    DialogueTurn,
    ExecutionEvidence,
    MemoryItem,
    MemoryKind,
    MemoryScope,
)
from tests.strategies import context_pack


class TestDefaults:
    def test_empty_pack(self):
        pack = ContextPack()
        assert pack.active_constraints == []
        assert pack.pending_todos == []
        assert pack.execution_evidence == []
        assert pack.compression_quality_pass is False

    def test_empty_pack_renders_empty(self):
        assert ContextPack().approx_text() == ""

    def test_memory_item_defaults(self):
        item = MemoryItem(memory_id="m1")
        assert item.scope is MemoryScope.WORKING
        assert item.kind is MemoryKind.FACT

    def test_collections_not_shared(self):
        a = ContextPack()
        b = ContextPack()
        a.active_constraints.append("x")
        assert b.active_constraints == []


class TestApproxText:
    def test_part_order(self):
        pack = ContextPack(
            system_contract="sys",
            objective="goal",
            thread_snapshot="snap",
            active_constraints=["c1"],
            recent_dialogue=[DialogueTurn(user_text="hi", assistant_text="hello")],
            execution_evidence=[ExecutionEvidence(span_id="s", summary="ran tests")],
            pending_todos=[MemoryItem(memory_id="t", content="fix bug")],
            retrieved_long_term_memory=[MemoryItem(memory_id="m", content="likes tabs")],
        )
        assert pack.approx_text() == (
            "sys\ngoal\nsnap\nc1\nhi\nhello\nran tests\nfix bug\nlikes tabs"
        )

    def test_header_parts_trimmed(self):
        pack = ContextPack(system_contract="  sys  ", objective="\tgoal\n")
        assert pack.approx_text() == "sys\ngoal"

    def test_empty_header_parts_kept_as_blank_lines(self):
        pack = ContextPack(system_contract="sys", active_constraints=["c1"])
        assert pack.approx_text() == "sys\n\n\nc1"

    def test_constraints_kept_verbatim(self):
        pack = ContextPack(system_contract="sys", active_constraints=[" c1 "])
        assert pack.approx_text().endswith("\n c1")

    def test_blank_dialogue_and_summaries_skipped(self):
        pack = ContextPack(
            system_contract="sys",
            objective="goal",
            thread_snapshot="snap",
            recent_dialogue=[DialogueTurn(user_text="   ", assistant_text="ok")],
            execution_evidence=[ExecutionEvidence(span_id="s", summary="")],
            pending_todos=[MemoryItem(memory_id="t", content="  ")],
        )
        assert pack.approx_text() == "sys\ngoal\nsnap\nok"

    def test_outer_whitespace_stripped(self):
        pack = ContextPack(recent_dialogue=[DialogueTurn(user_text="only turn")])
        assert pack.approx_text() == "only turn"

    def test_ids_do_not_contribute(self):
        a = ContextPack(system_contract="sys", pending_todos=[MemoryItem(memory_id="a")])
        b = ContextPack(
            system_contract="sys", pending_todos=[MemoryItem(memory_id="a-much-longer-id")]
        )
        assert a.approx_text() == b.approx_text()

    @given(context_pack)
    def test_deterministic(self, pack):
        assert pack.approx_text() == pack.approx_text()

    @given(context_pack)
    def test_more_content_renders_longer(self, pack):
        grown = pack.model_copy(
            update={
                "pending_todos": pack.pending_todos
                + [MemoryItem(memory_id="extra", content="another thing to do")]
            }
        )
        assert len(grown.approx_text()) > len(pack.approx_text())


class TestLoading:
    def test_model_validate_json(self):
        raw = (
            '{"active_constraints": ["must keep tests"],'
            ' "pending_todos": [{"memory_id": "todo_1", "kind": "todo"}],'
            ' "execution_evidence": [{"span_id": "span_1", "summary": "ok"}]}'
        )
        pack = ContextPack.model_validate_json(raw)
        assert pack.pending_todos[0].kind is MemoryKind.TODO
        assert pack.execution_evidence[0].span_id == "span_1"

    def test_invalid_kind_rejected(self):
        with pytest.raises(Exception):
            MemoryItem(memory_id="m", kind="wish")
