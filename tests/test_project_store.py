"""Tests for the project store."""

import json
import pytest
from token_translator.models import FlatRow, GroupExtension, Project
from token_translator.storage import ProjectStore
from token_translator.types import ErrorType, Language, ProcessingError


class TestProjectStoreRows:
    """Row operations of ProjectStore."""

    def test_rows_sorted_by_key_path(self, memory_store):
        """Test rows come back ordered by key path."""
        memory_store.upsert_rows([FlatRow(key_path="b"), FlatRow(key_path="a.z"), FlatRow(key_path="a")])

        assert [row.key_path for row in memory_store.rows()] == ["a", "a.z", "b"]
        assert len(memory_store) == 3
        assert "a.z" in memory_store

    def test_upsert_replaces_values(self, memory_store):
        """Test re-uploading a key path replaces its values wholesale."""
        memory_store.upsert_rows([FlatRow(key_path="a", az_value="X", en_value="Y", token_type="string")])
        memory_store.upsert_rows([FlatRow(key_path="a", en_value="Z")])

        row = memory_store.get("a")
        assert row.az_value is None
        assert row.en_value == "Z"
        assert row.token_type is None

    def test_upsert_keeps_original_key(self, memory_store):
        """Test an upload over a renamed row keeps its original key."""
        memory_store.upsert_rows([FlatRow(key_path="a.Type", en_value="X")])
        memory_store.rename("a.Type", "a.common_fix_type")

        memory_store.upsert_rows([FlatRow(key_path="a.common_fix_type", en_value="New")])

        row = memory_store.get("a.common_fix_type")
        assert row.original_key == "a.Type"
        assert row.en_value == "New"

    def test_get_missing(self, memory_store):
        """Test looking up an unknown key path."""
        with pytest.raises(ProcessingError) as exc_info:
            memory_store.get("missing")

        assert exc_info.value.error_type == ErrorType.NOT_FOUND

    def test_update_value_empty_clears(self, memory_store):
        """Test an empty edit stores null."""
        memory_store.upsert_rows([FlatRow(key_path="a", ru_value="Да")])

        row = memory_store.update_value("a", "ru", "")

        assert row.ru_value is None

    def test_update_value_invalid_language(self, memory_store):
        """Test editing with an unknown language code."""
        memory_store.upsert_rows([FlatRow(key_path="a")])

        with pytest.raises(ValueError, match="Unsupported language"):
            memory_store.update_value("a", "de", "X")

    def test_rename(self, memory_store):
        """Test renaming moves the row and records the original key."""
        memory_store.upsert_rows([FlatRow(key_path="a.Old", en_value="X")])

        row = memory_store.rename("a.Old", "a.new")

        assert "a.Old" not in memory_store
        assert memory_store.get("a.new") is row
        assert row.original_key == "a.Old"
        assert row.en_value == "X"

    def test_rename_twice_keeps_first_original_key(self, memory_store):
        """Test original_key is set only by the first rename."""
        memory_store.upsert_rows([FlatRow(key_path="a")])
        memory_store.rename("a", "b")

        row = memory_store.rename("b", "c")

        assert row.original_key == "a"

    def test_rename_conflict(self, memory_store):
        """Test renaming onto an existing key path."""
        memory_store.upsert_rows([FlatRow(key_path="a", en_value="1"), FlatRow(key_path="b", en_value="2")])

        with pytest.raises(ProcessingError) as exc_info:
            memory_store.rename("a", "b")

        assert exc_info.value.error_type == ErrorType.CONFLICT
        assert memory_store.get("a").en_value == "1"
        assert memory_store.get("b").en_value == "2"

    def test_rename_empty_target(self, memory_store):
        """Test renaming to a blank key path."""
        memory_store.upsert_rows([FlatRow(key_path="a")])

        with pytest.raises(ProcessingError) as exc_info:
            memory_store.rename("a", " ")

        assert exc_info.value.error_type == ErrorType.KEY_PATH

    def test_rename_to_same_path(self, memory_store):
        """Test renaming to the current path changes nothing."""
        memory_store.upsert_rows([FlatRow(key_path="a")])

        row = memory_store.rename("a", "a")

        assert row.original_key is None

    def test_delete_keeps_group_extensions(self, memory_store):
        """Test deleting rows leaves group extensions in place."""
        memory_store.upsert_rows([FlatRow(key_path="g.a", en_value="X")])
        memory_store.upsert_group_extensions([GroupExtension(group_path="g", extensions={"k": 1})])

        memory_store.delete("g.a")

        assert len(memory_store) == 0
        assert [ext.group_path for ext in memory_store.group_extensions()] == ["g"]

    def test_search(self, memory_store):
        """Test case-insensitive search across keys and values."""
        memory_store.upsert_rows([
            FlatRow(key_path="home.title", en_value="Home"),
            FlatRow(key_path="buttons.save", ru_value="Сохранить"),
            FlatRow(key_path="buttons.ok", az_value="Oldu"),
        ])
        memory_store.rename("buttons.ok", "buttons.confirm")

        assert [row.key_path for row in memory_store.search("HOME")] == ["home.title"]
        assert [row.key_path for row in memory_store.search("сохран")] == ["buttons.save"]
        assert [row.key_path for row in memory_store.search("ok")] == ["buttons.confirm"]
        assert len(memory_store.search("")) == 3


class TestProjectStorePersistence:
    """Save and load of ProjectStore."""

    def test_create_writes_file(self, temp_dir):
        """Test creating a store writes an empty document."""
        path = temp_dir / "nested" / "project.json"

        store = ProjectStore.create(path, "App")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["project"]["name"] == "App"
        assert data["translations"] == []
        assert store.path == path

    def test_save_and_load_round_trip(self, file_store):
        """Test everything stored survives a reload."""
        file_store.upsert_rows([
            FlatRow(key_path="a.Type", az_value="Növ", en_value="Type", token_type="string",
                    figma_variable_id="VariableID:1:2"),
            FlatRow(key_path="b", ru_value="Б"),
        ])
        file_store.rename("a.Type", "a.common_fix_type")
        file_store.upsert_group_extensions([GroupExtension(group_path="a", extensions={"com.figma": {"x": 1}})])
        file_store.ignore_duplicate("en", "Type")
        file_store.save()

        loaded = ProjectStore.load(file_store.path)

        assert loaded.project == file_store.project
        assert [row.to_dict() for row in loaded.rows()] == [row.to_dict() for row in file_store.rows()]
        assert [ext.to_dict() for ext in loaded.group_extensions()] == \
            [ext.to_dict() for ext in file_store.group_extensions()]
        assert loaded.ignored_duplicates() == {(Language.EN, "Type")}

    def test_save_keeps_unicode(self, file_store):
        """Test values are written without ASCII escaping."""
        file_store.upsert_rows([FlatRow(key_path="a", az_value="Ləğv et")])
        file_store.save()

        assert "Ləğv et" in file_store.path.read_text(encoding="utf-8")

    def test_save_without_path(self, memory_store):
        """Test saving an in-memory store."""
        with pytest.raises(ProcessingError) as exc_info:
            memory_store.save()

        assert exc_info.value.error_type == ErrorType.FILESYSTEM

    def test_load_missing_file(self, temp_dir):
        """Test loading a store that does not exist."""
        with pytest.raises(ProcessingError) as exc_info:
            ProjectStore.load(temp_dir / "missing.json")

        assert exc_info.value.error_type == ErrorType.NOT_FOUND

    def test_load_malformed_store(self, temp_dir):
        """Test loading a JSON document that is not a store."""
        path = temp_dir / "broken.json"
        path.write_text('{"translations": []}', encoding="utf-8")

        with pytest.raises(ProcessingError) as exc_info:
            ProjectStore.load(path)

        assert exc_info.value.error_type == ErrorType.STRUCTURE

    def test_ignored_duplicates(self, memory_store):
        """Test duplicate exclusions are normalized and deduplicated."""
        memory_store.ignore_duplicate(Language.AZ, "Bəli")
        memory_store.ignore_duplicate("AZ", "Bəli")

        assert memory_store.ignored_duplicates() == {(Language.AZ, "Bəli")}

    def test_save_under_a_file(self, temp_dir):
        """Test a store path whose parent is a regular file."""
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        store = ProjectStore(Project(name="p"), path=blocker / "store.json")

        with pytest.raises(ProcessingError) as exc_info:
            store.save()

        assert exc_info.value.error_type == ErrorType.FILESYSTEM

    def test_create_under_a_file(self, temp_dir):
        """Test creating a store where no directory can be made."""
        blocker = temp_dir / "blocker"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(ProcessingError) as exc_info:
            ProjectStore.create(blocker / "nested" / "store.json", "p")

        assert exc_info.value.error_type == ErrorType.FILESYSTEM


class TestProjectStoreTransaction:
    """Rollback behaviour of ProjectStore.transaction."""

    def test_rollback_on_processing_error(self, memory_store):
        """Test every change in a failed block is undone."""
        memory_store.upsert_rows([FlatRow(key_path="a", en_value="old")])

        with pytest.raises(ProcessingError):
            with memory_store.transaction():
                memory_store.update_value("a", "en", "new")
                memory_store.upsert_rows([FlatRow(key_path="b", en_value="X")])
                memory_store.upsert_group_extensions([GroupExtension(group_path="g", extensions={})])
                memory_store.ignore_duplicate("en", "X")
                memory_store.save()

        assert [row.key_path for row in memory_store.rows()] == ["a"]
        assert memory_store.get("a").en_value == "old"
        assert memory_store.group_extensions() == []
        assert memory_store.ignored_duplicates() == set()

    def test_commit_on_success(self, memory_store):
        """Test changes are kept when the block finishes."""
        with memory_store.transaction():
            memory_store.upsert_rows([FlatRow(key_path="a", en_value="X")])

        assert "a" in memory_store

    def test_other_errors_propagate_without_rollback(self, memory_store):
        """Test only ProcessingError triggers the rollback."""
        with pytest.raises(ValueError):
            with memory_store.transaction():
                memory_store.upsert_rows([FlatRow(key_path="a")])
                raise ValueError("boom")

        assert "a" in memory_store
