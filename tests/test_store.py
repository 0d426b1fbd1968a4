"""Tests for module storage collaborators and persisted removal."""

from __future__ import annotations

import os
import stat

import pytest

from asmsplit.exit_codes import EXIT_IO_FAILURE, FunctionNotFoundError, ModuleIOError
from asmsplit.refactor.transforms import remove_function
from asmsplit.workspace.store import (
    ContentProvider,
    FileContentProvider,
    InMemoryBufferRegistry,
    NullBufferRegistry,
)

from conftest import MAIN_MODULE


class DictProvider(ContentProvider):
    """In-memory provider that records every write."""

    def __init__(self, files):
        self.files = dict(files)
        self.writes = []

    def read_text(self, module_path):
        try:
            return self.files[module_path]
        except KeyError:
            raise ModuleIOError(f"no such module: {module_path}") from None

    def write_text(self, module_path, text):
        self.writes.append(module_path)
        self.files[module_path] = text


# ── FileContentProvider ───────────────────────────────────────────────


class TestFileContentProvider:
    def test_relative_paths_resolve_against_root(self, asm_project):
        provider = FileContentProvider(asm_project)
        assert provider.read_text("asm/main.s") == MAIN_MODULE

    def test_absolute_paths_pass_through(self, asm_project):
        provider = FileContentProvider("/nonexistent-root")
        assert provider.read_text(str(asm_project / "asm" / "main.s")) == MAIN_MODULE

    def test_missing_module_raises_io_error(self, tmp_path):
        provider = FileContentProvider(tmp_path)
        with pytest.raises(ModuleIOError) as exc_info:
            provider.read_text("asm/missing.s")
        assert exc_info.value.exit_code == EXIT_IO_FAILURE
        assert "asm/missing.s" in exc_info.value.message

    def test_write_keeps_line_terminators(self, tmp_path):
        provider = FileContentProvider(tmp_path)
        provider.write_text("m.s", "glabel f\r\n.size f, .-f\r\n")
        assert (tmp_path / "m.s").read_bytes() == b"glabel f\r\n.size f, .-f\r\n"

    def test_write_leaves_no_temp_files(self, tmp_path):
        provider = FileContentProvider(tmp_path)
        provider.write_text("m.s", "a")
        provider.write_text("m.s", "b")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["m.s"]
        assert provider.read_text("m.s") == "b"

    def test_write_into_missing_directory_raises_io_error(self, tmp_path):
        provider = FileContentProvider(tmp_path)
        with pytest.raises(ModuleIOError):
            provider.write_text("no/such/dir/m.s", "a")

    def test_latin1_fallback(self, tmp_path):
        (tmp_path / "m.s").write_bytes(b"glabel f\n/* caf\xe9 */\n")
        assert FileContentProvider(tmp_path).read_text("m.s") == "glabel f\n/* café */\n"

    def test_utf8_bom_stripped(self, tmp_path):
        (tmp_path / "m.s").write_bytes(b"\xef\xbb\xbfglabel f\n")
        assert FileContentProvider(tmp_path).read_text("m.s") == "glabel f\n"

    def test_unread_module_is_written_as_utf8(self, tmp_path):
        provider = FileContentProvider(tmp_path)
        provider.write_text("m.s", "/* café */\n")
        assert provider.encoding_of("m.s") == "utf-8"
        assert (tmp_path / "m.s").read_bytes() == b"/* caf\xc3\xa9 */\n"

    def test_unencodable_text_raises_io_error(self, tmp_path):
        (tmp_path / "m.s").write_bytes(b"\xff\n")
        provider = FileContentProvider(tmp_path)
        provider.read_text("m.s")
        with pytest.raises(ModuleIOError):
            provider.write_text("m.s", "☃\n")
        assert (tmp_path / "m.s").read_bytes() == b"\xff\n"


# ── Buffer registries ─────────────────────────────────────────────────


class TestBufferRegistries:
    def test_null_registry(self):
        reg = NullBufferRegistry()
        assert reg.is_dirty("anything.s") is False
        reg.save("anything.s")

    def test_in_memory_registry_tracks_dirty_state(self):
        provider = DictProvider({"m.s": "old"})
        reg = InMemoryBufferRegistry(provider)
        assert not reg.is_open("m.s")
        assert reg.open("m.s") == "old"
        assert reg.is_open("m.s")
        assert not reg.is_dirty("m.s")
        reg.edit("m.s", "edited")
        assert reg.is_dirty("m.s")
        reg.save("m.s")
        assert not reg.is_dirty("m.s")
        assert provider.files["m.s"] == "edited"

    def test_edit_requires_open_buffer(self):
        reg = InMemoryBufferRegistry(DictProvider({}))
        with pytest.raises(KeyError):
            reg.edit("m.s", "x")


# ── remove_function (read -> compute -> write -> save) ────────────────


class TestRemoveFunction:
    def test_writes_updated_text(self):
        provider = DictProvider({"asm/main.s": MAIN_MODULE})
        result = remove_function("asm/main.s", "func_80001000", provider)
        assert result.written
        assert not result.buffer_saved
        assert provider.writes == ["asm/main.s"]
        assert "glabel func_80001000" not in provider.files["asm/main.s"]
        assert result.text == provider.files["asm/main.s"]

    def test_dry_run_does_not_write(self):
        provider = DictProvider({"asm/main.s": MAIN_MODULE})
        result = remove_function("asm/main.s", "func_80001000", provider, dry_run=True)
        assert not result.written
        assert provider.writes == []
        assert provider.files["asm/main.s"] == MAIN_MODULE

    def test_not_found_does_not_write(self):
        provider = DictProvider({"asm/main.s": MAIN_MODULE})
        with pytest.raises(FunctionNotFoundError):
            remove_function("asm/main.s", "missing", provider)
        assert provider.writes == []

    def test_read_failure_propagates(self):
        with pytest.raises(ModuleIOError):
            remove_function("asm/missing.s", "f", DictProvider({}))

    def test_dirty_buffer_is_saved_after_write(self):
        provider = DictProvider({"asm/main.s": MAIN_MODULE})
        buffers = InMemoryBufferRegistry(provider)
        buffers.open("asm/main.s")
        buffers.edit("asm/main.s", MAIN_MODULE + "\n# unsaved note\n")
        result = remove_function("asm/main.s", "func_80001000", provider, buffers)
        assert result.buffer_saved
        assert provider.writes == ["asm/main.s", "asm/main.s"]
        assert not buffers.is_dirty("asm/main.s")

    def test_clean_buffer_is_not_saved(self):
        provider = DictProvider({"asm/main.s": MAIN_MODULE})
        buffers = InMemoryBufferRegistry(provider)
        buffers.open("asm/main.s")
        result = remove_function("asm/main.s", "func_80001000", provider, buffers)
        assert not result.buffer_saved
        assert provider.writes == ["asm/main.s"]

    def test_on_disk_module(self, asm_project):
        provider = FileContentProvider(asm_project)
        remove_function("asm/main.s", "func_80001080", provider)
        text = (asm_project / "asm" / "main.s").read_text(encoding="utf-8")
        assert "func_80001080" not in text
        assert "glabel func_80001000" in text


# ── Write-back preserves what removal did not touch ───────────────────


class TestWriteBackFidelity:
    def test_latin1_module_keeps_its_bytes(self, tmp_path):
        data = b"glabel f\n  nop\n.size f, .-f\n\nglabel g\n  /* na\xefve */\n.size g, .-g\n"
        (tmp_path / "m.s").write_bytes(data)
        provider = FileContentProvider(tmp_path)
        remove_function("m.s", "f", provider)
        assert provider.encoding_of("m.s") == "latin-1"
        assert (tmp_path / "m.s").read_bytes() == b"\n\nglabel g\n  /* na\xefve */\n.size g, .-g\n"

    def test_bom_is_kept(self, tmp_path):
        data = b"\xef\xbb\xbfglabel f\n.size f, .-f\n\nglabel g\n.size g, .-g\n"
        (tmp_path / "m.s").write_bytes(data)
        provider = FileContentProvider(tmp_path)
        remove_function("m.s", "g", provider)
        assert provider.encoding_of("m.s") == "utf-8-sig"
        assert (tmp_path / "m.s").read_bytes() == b"\xef\xbb\xbfglabel f\n.size f, .-f\n\n"

    def test_utf8_module_stays_utf8(self, tmp_path):
        data = "glabel f\n.size f, .-f\nglabel g\n  /* café */\n.size g, .-g\n".encode("utf-8")
        (tmp_path / "m.s").write_bytes(data)
        provider = FileContentProvider(tmp_path)
        remove_function("m.s", "f", provider)
        assert (tmp_path / "m.s").read_bytes() == "\nglabel g\n  /* café */\n.size g, .-g\n".encode("utf-8")

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_file_mode_is_kept(self, tmp_path):
        path = tmp_path / "m.s"
        path.write_text("glabel f\n.size f, .-f\nglabel g\n.size g, .-g\n", encoding="utf-8")
        path.chmod(0o664)
        remove_function("m.s", "f", FileContentProvider(tmp_path))
        assert stat.S_IMODE(path.stat().st_mode) == 0o664
        assert path.read_text(encoding="utf-8") == "\nglabel g\n.size g, .-g\n"
