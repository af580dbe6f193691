"""Tests for note assembly, creation and structure retrieval."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path

import pytest

from obsidian_notes.core.formatter import format_conversation_note, generate_frontmatter
from obsidian_notes.core.note_operations import create_conversation_note, get_note_structure
from obsidian_notes.core.parser import parse_note
from obsidian_notes.core.vault_operations import VaultStorage
from obsidian_notes.data_models import ConversationNoteParams, NoteStyle


NOW = datetime(2024, 3, 5, 14, 30, 15, 250000, tzinfo=timezone.utc)


class TestFormatter:
    def test_frontmatter_block(self):
        block = generate_frontmatter(["python", "tips"], NoteStyle.DETAILED, datetime(2024, 1, 1))

        assert block == (
            "---\n"
            'created: "2024-01-01"\n'
            'style: "detailed"\n'
            'tags: ["python", "tips", "mcp"]\n'
            "---"
        )

    def test_concise_style_uses_bullets(self):
        params = ConversationNoteParams(topic="Git", highlights=["rebase", "squash"])

        note = format_conversation_note(params, datetime(2024, 1, 1))

        assert note.endswith("\n\n# Git\n\n- rebase\n- squash\n")
        assert 'style: "concise"' in note

    def test_detailed_style_uses_paragraphs(self):
        params = ConversationNoteParams(
            topic="Attention", highlights=["First idea.", "Second idea."], style=NoteStyle.DETAILED
        )

        note = format_conversation_note(params, datetime(2024, 1, 1))

        assert note.endswith("# Attention\n\nFirst idea.\n\nSecond idea.\n\n")

    def test_eli5_style_adds_explanation_marker(self):
        params = ConversationNoteParams(
            topic="Gravity", highlights=["Things fall down."], style=NoteStyle.ELI5
        )

        note = format_conversation_note(params, datetime(2024, 1, 1))

        assert note.endswith("# Gravity\n\n> Simple explanation\n\nThings fall down.\n\n")

    def test_no_highlights(self):
        params = ConversationNoteParams(topic="Empty", highlights=[])

        note = format_conversation_note(params, datetime(2024, 1, 1))

        assert note.endswith("---\n\n# Empty\n\n")

    def test_custom_auto_tags(self):
        params = ConversationNoteParams(topic="T", highlights=[], tags=["x"])

        note = format_conversation_note(params, datetime(2024, 1, 1), auto_tags=("ai", "mcp"))

        assert 'tags: ["x", "ai", "mcp"]' in note

    def test_output_parses_back(self):
        params = ConversationNoteParams(
            topic="Round Trip", highlights=["uses #inline tag"], tags=["alpha"]
        )

        parsed = parse_note(format_conversation_note(params, datetime(2024, 6, 1)))

        assert parsed.title == "Round Trip"
        assert parsed.frontmatter == {
            "created": "2024-06-01",
            "style": "concise",
            "tags": ["alpha", "mcp"],
        }
        assert set(parsed.tags) == {"alpha", "mcp", "inline"}


class TestCreateConversationNote:
    @pytest.mark.asyncio
    async def test_creates_missing_default_folder(self, storage, vault_path):
        params = ConversationNoteParams(topic="Python tips", highlights=["Use venvs"])

        result = await create_conversation_note(storage, params, now=NOW)

        expected = vault_path / "MCP Notes" / "2024-03-05 - Python tips.md"
        assert result.success is True
        assert result.error is None
        assert (vault_path / "MCP Notes").is_dir()
        assert expected.is_file()
        assert Path(result.path) == expected.resolve()
        assert "- Use venvs" in expected.read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_custom_folder_is_created_recursively(self, storage, vault_path):
        params = ConversationNoteParams(topic="Deep", highlights=[], folder="Work/2024/Q1")

        result = await create_conversation_note(storage, params, now=NOW)

        assert result.success is True
        assert (vault_path / "Work" / "2024" / "Q1" / "2024-03-05 - Deep.md").is_file()

    @pytest.mark.asyncio
    async def test_default_folder_override(self, storage, vault_path):
        params = ConversationNoteParams(topic="Inbox", highlights=[])

        await create_conversation_note(storage, params, default_folder="Inbox", now=NOW)

        assert (vault_path / "Inbox" / "2024-03-05 - Inbox.md").is_file()

    @pytest.mark.asyncio
    async def test_collision_adds_timestamp(self, storage, vault_path):
        params = ConversationNoteParams(topic="Same topic", highlights=["one"])

        first = await create_conversation_note(storage, params, now=NOW)
        second = await create_conversation_note(storage, params, now=NOW)

        assert first.success and second.success
        assert first.path != second.path
        assert second.path.endswith("2024-03-05 - Same topic - 2024-03-05T14-30-15-250Z.md")
        assert len(list((vault_path / "MCP Notes").iterdir())) == 2

    @pytest.mark.asyncio
    async def test_topic_is_sanitized(self, storage, vault_path):
        params = ConversationNoteParams(topic='What is a/b: "ratio"?', highlights=[])

        result = await create_conversation_note(storage, params, now=NOW)

        assert result.success is True
        assert (vault_path / "MCP Notes" / "2024-03-05 - What is ab ratio.md").is_file()

    @pytest.mark.asyncio
    async def test_missing_vault_reports_configuration_error(self, tmp_path):
        storage = VaultStorage(tmp_path / "does-not-exist")
        params = ConversationNoteParams(topic="Lost", highlights=[])

        result = await create_conversation_note(storage, params, now=NOW)

        assert result.success is False
        assert result.path is None
        assert result.error == "Obsidian vault path not found or invalid"

    @pytest.mark.asyncio
    async def test_vault_path_that_is_a_file(self, tmp_path):
        file_path = tmp_path / "vault.md"
        file_path.write_text("not a folder", encoding="utf-8")
        params = ConversationNoteParams(topic="Lost", highlights=[])

        result = await create_conversation_note(VaultStorage(file_path), params, now=NOW)

        assert result.success is False

    @pytest.mark.asyncio
    async def test_storage_failure_is_returned_not_raised(self, storage, vault_path):
        # A file where the folder should be makes directory creation fail
        (vault_path / "Blocked").write_text("", encoding="utf-8")
        params = ConversationNoteParams(topic="Nope", highlights=[], folder="Blocked")

        result = await create_conversation_note(storage, params, now=NOW)

        assert result.success is False
        assert result.error

    @pytest.mark.asyncio
    async def test_storage_calls_run_in_worker_threads(self, storage, monkeypatch):
        routed = []
        real_to_thread = asyncio.to_thread

        async def recording_to_thread(func, *args, **kwargs):
            routed.append(func.__name__)
            return await real_to_thread(func, *args, **kwargs)

        monkeypatch.setattr(asyncio, "to_thread", recording_to_thread)
        params = ConversationNoteParams(topic="Threaded", highlights=[])

        result = await create_conversation_note(storage, params, now=NOW)

        assert result.success is True
        assert routed == ["validate_vault_path", "ensure_dir", "exists", "write_file"]

    @pytest.mark.asyncio
    async def test_created_note_uses_local_date_in_frontmatter(self, storage, vault_path):
        params = ConversationNoteParams(topic="Dated", highlights=[])

        result = await create_conversation_note(storage, params, now=NOW)

        content = (vault_path / "MCP Notes" / "2024-03-05 - Dated.md").read_text(encoding="utf-8")
        expected_date = NOW.astimezone().strftime("%Y-%m-%d")
        assert result.success is True
        assert f'created: "{expected_date}"' in content


class TestGetNoteStructure:
    @pytest.mark.asyncio
    async def test_returns_parsed_structure(self, storage, write_note):
        content = '---\ncreated: "2024-01-01"\ntags: ["a", "b"]\n---\n# Hi\nbody #c'
        write_note("Notes/hi.md", content)

        structure = await get_note_structure(storage, "Notes/hi.md")

        assert structure is not None
        assert structure.path == "Notes/hi.md"
        assert structure.content == content
        assert structure.title == "Hi"
        assert structure.frontmatter == {"created": "2024-01-01", "tags": ["a", "b"]}
        assert sorted(structure.tags) == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_note_without_frontmatter(self, storage, write_note):
        write_note("plain.md", "Just text #tagged")

        structure = await get_note_structure(storage, "plain.md")

        assert structure.frontmatter is None
        assert structure.title == "Untitled"
        assert structure.tags == ["tagged"]

    @pytest.mark.asyncio
    async def test_missing_note_returns_none(self, storage):
        assert await get_note_structure(storage, "missing.md") is None

    @pytest.mark.asyncio
    async def test_escaping_path_returns_none(self, storage):
        assert await get_note_structure(storage, "../outside.md") is None

    @pytest.mark.asyncio
    async def test_payload(self, storage, write_note):
        write_note("p.md", "# P")

        payload = (await get_note_structure(storage, "p.md")).as_payload()

        assert payload == {
            "path": "p.md",
            "content": "# P",
            "title": "P",
            "frontmatter": None,
            "tags": [],
        }
