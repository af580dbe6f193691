"""Tests for vault file access and note filename helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from obsidian_notes.core.vault_operations import (
    VaultStorage,
    collision_timestamp,
    generate_file_name,
    sanitize_file_name,
)


class TestFileNames:
    def test_sanitize_removes_reserved_characters(self):
        assert sanitize_file_name('a<b>c:d"e/f\\g|h?i*j') == "abcdefghij"

    def test_sanitize_collapses_whitespace(self):
        assert sanitize_file_name("  many \t spaces\n here  ") == "many spaces here"

    def test_sanitize_truncates_to_100_characters(self):
        assert sanitize_file_name("x" * 150) == "x" * 100

    def test_sanitize_keeps_dots_and_unicode(self):
        assert sanitize_file_name("v1.4 Café notes") == "v1.4 Café notes"

    def test_generate_file_name_uses_date_prefix(self):
        assert generate_file_name("Weekly sync", datetime(2024, 2, 29, 23, 59)) == (
            "2024-02-29 - Weekly sync.md"
        )

    def test_generate_file_name_uses_utc_date(self):
        late_evening = datetime(2024, 1, 1, 22, 0, tzinfo=timezone(timedelta(hours=-5)))

        assert generate_file_name("Late", late_evening) == "2024-01-02 - Late.md"

    def test_collision_timestamp_is_filename_safe(self):
        stamp = collision_timestamp(datetime(2024, 1, 1, 12, 30, 45, 123456, tzinfo=timezone.utc))

        assert stamp == "2024-01-01T12-30-45-123Z"
        assert ":" not in stamp and "." not in stamp


class TestPathSafety:
    def test_full_path_inside_vault(self, storage, vault_path):
        assert storage.full_path("Projects/a.md") == vault_path.resolve() / "Projects" / "a.md"

    @pytest.mark.parametrize("relative", ["../outside.md", "Projects/../../x.md", "/etc/passwd"])
    def test_escaping_paths_are_rejected(self, storage, relative):
        with pytest.raises(ValueError, match="escapes the vault"):
            storage.full_path(relative)

    def test_dots_inside_names_are_allowed(self, storage, write_note):
        write_note("v1.4 Release.md", "text")

        assert storage.exists("v1.4 Release.md")


class TestVaultStorage:
    def test_validate_vault_path(self, storage, tmp_path):
        assert storage.validate_vault_path() is True
        assert VaultStorage(tmp_path / "missing").validate_vault_path() is False

    def test_vault_root_that_is_a_file_is_invalid(self, tmp_path):
        root_file = tmp_path / "vault.md"
        root_file.write_text("", encoding="utf-8")

        assert VaultStorage(root_file).validate_vault_path() is False

    def test_is_directory(self, storage, write_note):
        write_note("Projects/a.md", "")

        assert storage.is_directory() is True
        assert storage.is_directory("Projects") is True
        assert storage.is_directory("Projects/a.md") is False
        assert storage.is_directory("Missing") is False

    def test_write_and_read_round_trip(self, storage):
        storage.ensure_dir("Inbox")
        target = storage.write_file("Inbox/note.md", "héllo")

        assert target.is_file()
        assert storage.read_file("Inbox/note.md") == "héllo"

    def test_invalid_utf8_is_replaced(self, storage, vault_path):
        (vault_path / "broken.md").write_bytes(b"ok \xff\xfe end")

        assert storage.read_file("broken.md") == "ok �� end"

    def test_modified_time(self, storage, write_note):
        write_note("timed.md", "x", mtime=1_700_000_000)

        assert storage.modified_time("timed.md") == datetime.fromtimestamp(1_700_000_000)

    def test_list_files_order_and_filtering(self, storage, write_note):
        write_note("b.md", "")
        write_note("A/z.md", "")
        write_note("A/Inner/y.md", "")
        write_note("a.md", "")
        write_note("image.png", "")
        write_note("notes.MD", "")

        assert storage.list_files() == ["A/Inner/y.md", "A/z.md", "a.md", "b.md"]

    def test_list_files_in_folder(self, storage, write_note):
        write_note("root.md", "")
        write_note("Projects/a.md", "")

        assert storage.list_files("Projects") == ["Projects/a.md"]

    def test_list_files_missing_folder(self, storage):
        assert storage.list_files("Nope") == []

    def test_list_files_escaping_folder_raises(self, storage):
        with pytest.raises(ValueError):
            storage.list_files("..")
