import pytest

CONFIG_ENV_VARS = (
    "MIN_CONFIDENCE",
    "BATCH_SIZE",
    "SAMPLE_SIZE",
    "INFERENCE_ROWS",
    "DEFAULT_TABLE",
    "EXCLUSIVE_SOURCES",
)


@pytest.fixture(autouse=True)
def _clean_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell settings out of config-dependent tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
