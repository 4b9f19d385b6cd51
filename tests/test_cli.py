"""Tests for the llmdesk command group (click CliRunner)."""

import json

import pytest
from click.testing import CliRunner

from llmdesk.cli.main import cli
from llmdesk.cli.utils import mask_api_key

from conftest import make_provider


@pytest.fixture
def run(store, tmp_path):
    runner = CliRunner()

    def _run(*args, input=None):
        return runner.invoke(
            cli,
            ["--data-dir", str(tmp_path), *args],
            input=input,
            obj={"store": store},
        )

    return _run


class TestMaskApiKey:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("", ""),
            ("abcd", "****"),
            ("sk-abcdefghijk", "sk-*******hijk"),
        ],
    )
    def test_mask(self, key, expected):
        assert mask_api_key(key) == expected


class TestProvidersCommands:
    def test_list_empty(self, run):
        result = run("providers", "list")
        assert result.exit_code == 0
        assert "No providers configured." in result.output

    def test_list_masks_keys(self, run, store):
        store.save([make_provider(keys=["sk-abcdefghijk"])])
        result = run("providers", "list")
        assert result.exit_code == 0
        assert "OpenAI (openai)" in result.output
        assert "sk-abcdefghijk" not in result.output
        assert "hijk" in result.output

    def test_set_keys(self, run, store, secrets):
        store.save([make_provider()])
        result = run("providers", "set-keys", "openai", input="k1, k2\n")
        assert result.exit_code == 0, result.output
        assert secrets.data["openai"] == ["k1", "k2"]

    def test_set_keys_unknown_provider(self, run):
        result = run("providers", "set-keys", "nope", input="k1\n")
        assert result.exit_code == 1
        assert "provider not found" in result.output

    def test_delete(self, run, store):
        store.save([make_provider()])
        result = run("providers", "delete", "openai", "--yes")
        assert result.exit_code == 0
        assert store.load() == []


class TestDataCommands:
    def test_export_and_import_plaintext(self, run, store, tmp_path):
        store.save([make_provider("a", "A", keys=["ka"])])
        backup = tmp_path / "backup.json"

        result = run("data", "export", str(backup))
        assert result.exit_code == 0, result.output
        assert json.loads(backup.read_text())["providers"][0]["id"] == "a"

        store.clear()
        result = run("data", "import", str(backup), "--mode", "replace")
        assert result.exit_code == 0, result.output
        assert "1 providers, 1 models" in result.output
        assert store.load()[0].credentials.api_keys == ["ka"]

    def test_encrypted_round_trip(self, run, store, tmp_path):
        store.save([make_provider("a", "A", keys=["sk-encrypted-secret"])])
        backup = tmp_path / "backup.bin"

        result = run("data", "export", str(backup), "--encrypt",
                     input="pw\npw\n")
        assert result.exit_code == 0, result.output
        assert b"sk-encrypted-secret" not in backup.read_bytes()

        store.clear()
        result = run("data", "import", str(backup), "--encrypted",
                     input="pw\n")
        assert result.exit_code == 0, result.output
        assert store.load()[0].name == "A"

    def test_import_wrong_passphrase(self, run, store, tmp_path):
        store.save([make_provider("a", "A")])
        backup = tmp_path / "backup.bin"
        run("data", "export", str(backup), "--encrypt", input="pw\npw\n")

        result = run("data", "import", str(backup), "--encrypted",
                     input="other\n")
        assert result.exit_code == 1
        assert "decryption failed" in result.output

    def test_clear(self, run, store, secrets):
        store.save([make_provider(keys=["k"])])
        result = run("data", "clear", "--yes")
        assert result.exit_code == 0
        assert store.load() == []
        assert secrets.data == {}


class TestStoreInjection:
    def test_injected_store_is_not_rebuilt(self, run, store, monkeypatch):
        def unexpected(*args, **kwargs):
            raise AssertionError("ProviderStore should not be constructed")

        monkeypatch.setattr("llmdesk.cli.main.ProviderStore", unexpected)
        store.save([make_provider("a", "A")])

        result = run("providers", "list")

        assert result.exit_code == 0, result.output
        assert "A (a)" in result.output
