"""Tests for export/import: envelope, encryption and replace/merge."""

import datetime
import json

import pytest

from llmdesk.providers import (
    ImportResult,
    LLMDeskData,
    ProviderStore,
    UsageError,
)
from llmdesk.providers.transfer import (
    build_export,
    default_export_filename,
    export_to_file,
    import_data,
    import_from_file,
    merge_providers,
    read_import_file,
)

from conftest import FailingSecretStore, make_model, make_provider


def _names(providers):
    return [(p.id, p.name) for p in providers]


class TestMergeProviders:
    def setup_method(self):
        self.current = [
            make_provider("a", "A1"),
            make_provider("b", "B"),
        ]
        self.imported = [make_provider("a", "A2")]

    def test_merge_overwrites_by_id_and_keeps_rest(self):
        result = merge_providers(self.current, self.imported, "merge")
        assert _names(result) == [("a", "A2"), ("b", "B")]

    def test_replace(self):
        result = merge_providers(self.current, self.imported, "replace")
        assert _names(result) == [("a", "A2")]

    def test_merge_appends_new(self):
        result = merge_providers(
            self.current,
            [make_provider("c", "C"), make_provider("b", "B2")],
            "merge",
        )
        assert _names(result) == [("a", "A1"), ("b", "B2"), ("c", "C")]

    def test_merge_replaces_whole_record(self):
        imported = make_provider("a", "A2", models=[])
        [merged, _] = merge_providers(self.current, [imported], "merge")
        assert merged.models == []

    def test_unknown_mode(self):
        with pytest.raises(UsageError):
            merge_providers(self.current, self.imported, "append")


class TestBuildExport:
    def test_envelope(self):
        data = build_export([make_provider()])
        assert data.version == "1.0.0"
        assert data.metadata.generator == "llm-desk"
        assert data.metadata.created_at == data.metadata.modified_at
        parsed = datetime.datetime.fromisoformat(data.metadata.created_at)
        assert parsed.tzinfo is not None
        assert data.metadata.description == "LLM Desk configuration export"

    def test_default_filename(self):
        assert (
            default_export_filename(datetime.date(2024, 3, 9))
            == "llm-desk-backup-2024-03-09.json"
        )


class TestExportToFile:
    def test_cancelled(self, store, tmp_path):
        assert export_to_file(store, "") is False
        assert list(tmp_path.iterdir()) == []

    def test_plaintext_export_includes_keys(self, store, tmp_path):
        store.save([make_provider(keys=["sk-1"])])
        path = tmp_path / "backup.json"

        assert export_to_file(store, path) is True

        doc = json.loads(path.read_text(encoding="utf-8"))
        assert doc["version"] == "1.0.0"
        assert doc["metadata"]["generator"] == "llm-desk"
        assert doc["providers"][0]["credentials"]["apiKeys"] == ["sk-1"]

    def test_encrypted_export(self, store, tmp_path):
        store.save([make_provider(keys=["sk-1"])])
        path = tmp_path / "backup.bin"

        export_to_file(store, path, passphrase="hunter2")

        assert b"sk-1" not in path.read_bytes()
        data = read_import_file(path, passphrase="hunter2")
        assert data.providers[0].credentials.api_keys == ["sk-1"]


class TestImportData:
    def _document(self, providers, version="1.0.0"):
        return LLMDeskData(version=version, providers=providers)

    def test_merge(self, store):
        store.save([make_provider("a", "A1"), make_provider("b", "B")])
        result = import_data(
            store,
            self._document([make_provider("a", "A2")]),
            "merge",
        )
        assert result.success
        assert _names(store.load()) == [("a", "A2"), ("b", "B")]

    def test_replace(self, store, secrets):
        store.save([
            make_provider("a", "A1"),
            make_provider("b", "B", keys=["kb"]),
        ])
        result = import_data(
            store,
            self._document([make_provider("a", "A2")]),
            "replace",
        )
        assert result.success
        assert _names(store.load()) == [("a", "A2")]
        assert "b" not in secrets.data

    def test_counts_refer_to_imported_document(self, store):
        store.save([make_provider("x", "X")])
        document = self._document([
            make_provider(
                "a", "A", models=[make_model("m1"), make_model("m2")],
            ),
            make_provider("b", "B", models=[make_model("m3")]),
        ])
        result = import_data(store, document, "merge")
        assert result.imported.providers == 2
        assert result.imported.models == 3

    def test_unknown_mode_leaves_store_untouched(self, store):
        store.save([make_provider("a", "A1")])
        before = store.providers_path.read_bytes()

        result = import_data(
            store,
            self._document([make_provider("a", "A2")]),
            "append",
        )

        assert isinstance(result, ImportResult)
        assert not result.success
        assert "append" in result.message
        assert store.providers_path.read_bytes() == before

    def test_missing_version_is_a_warning(self, store):
        result = import_data(
            store,
            self._document([make_provider()], version=""),
            "replace",
        )
        assert result.success
        assert result.warnings == ["No version specified in import file"]

    def test_imported_keys_are_scrubbed(self, store, secrets):
        import_data(
            store,
            self._document([make_provider(keys=["sk-imported"])]),
            "replace",
        )
        assert b"sk-imported" not in store.providers_path.read_bytes()
        assert secrets.data["openai"] == ["sk-imported"]

    def test_save_failure_is_reported(self, tmp_path):
        store = ProviderStore(
            tmp_path,
            secrets=FailingSecretStore(fail_ids={"openai"}),
        )
        result = import_data(
            store,
            self._document([make_provider(keys=["sk"])]),
            "replace",
        )
        assert not result.success
        assert result.message.startswith("Failed to save imported data")
        assert result.imported.providers == 1

    def test_duplicate_ids_are_rejected(self, store, secrets):
        store.save([make_provider("x", "X", keys=["kx"])])
        before = store.providers_path.read_bytes()

        result = import_data(
            store,
            self._document([
                make_provider("a", "A1", keys=["k1"]),
                make_provider("a", "A2", keys=["k2"]),
            ]),
            "replace",
        )

        assert not result.success
        assert result.message == "Duplicate provider id in import file: a"
        assert result.imported.providers == 2
        assert store.providers_path.read_bytes() == before
        assert secrets.data == {"x": ["kx"]}


class TestImportFromFile:
    def test_cancelled(self, store):
        result = import_from_file(store, "", "merge")
        assert not result.success
        assert result.message == "Import cancelled"

    def test_null_lists_in_file(self, store, tmp_path):
        record = make_provider("a", "A").to_wire()
        record["limits"] = None
        record["models"][0]["modalities"] = None
        backup = tmp_path / "legacy.json"
        backup.write_text(
            json.dumps({"version": "1.0.0", "providers": [record]}),
            encoding="utf-8",
        )

        result = import_from_file(store, backup, "replace")

        assert result.success, result.message
        [provider] = store.load()
        assert provider.limits == []
        assert provider.models[0].modalities == []

    def test_round_trip_through_plaintext_file(self, store, tmp_path):
        providers = [make_provider("a", "A", keys=["ka"])]
        store.save(providers)
        path = tmp_path / "backup.json"
        export_to_file(store, path)
        store.clear()

        result = import_from_file(store, path, "replace")

        assert result.success
        assert store.load() == providers

    def test_round_trip_through_encrypted_file(self, store, tmp_path):
        providers = [make_provider("a", "A", keys=["ka"])]
        store.save(providers)
        path = tmp_path / "backup.bin"
        export_to_file(store, path, passphrase="pw")
        store.clear()

        result = import_from_file(store, path, "merge", passphrase="pw")

        assert result.success
        assert store.load() == providers

    def test_wrong_passphrase(self, store, tmp_path):
        store.save([make_provider("a", "A")])
        path = tmp_path / "backup.bin"
        export_to_file(store, path, passphrase="pw")

        result = import_from_file(store, path, "replace", passphrase="nope")

        assert not result.success
        assert result.message == "decryption failed"
        assert _names(store.load()) == [("a", "A")]

    def test_unparsable_file(self, store, tmp_path):
        path = tmp_path / "junk.json"
        path.write_text("this is not json", encoding="utf-8")
        result = import_from_file(store, path, "merge")
        assert not result.success
        assert result.message.startswith("Failed to parse import file")

    def test_mode_checked_before_reading(self, store, tmp_path):
        result = import_from_file(store, tmp_path / "missing.json", "append")
        assert not result.success
        assert "Invalid import mode" in result.message

    def test_missing_file_raises(self, store, tmp_path):
        with pytest.raises(OSError):
            import_from_file(store, tmp_path / "missing.json", "merge")
