from fluentbuilder.settings import Settings, get_settings


def test_defaults():
    settings = Settings()

    assert settings.terminal_operation == "build"
    assert settings.nested_capability_name == "Builder"
    assert settings.warn_on_type_mismatch is True


def test_from_env(monkeypatch):
    monkeypatch.setenv("FLUENTBUILDER_TERMINAL_OPERATION", "create")
    monkeypatch.setenv("FLUENTBUILDER_NESTED_CAPABILITY", "Factory")
    monkeypatch.setenv("FLUENTBUILDER_WARN_ON_TYPE_MISMATCH", "off")

    assert Settings.from_env() == Settings("create", "Factory", False)


def test_from_env_without_variables(monkeypatch):
    for name in (
        "FLUENTBUILDER_TERMINAL_OPERATION",
        "FLUENTBUILDER_NESTED_CAPABILITY",
        "FLUENTBUILDER_WARN_ON_TYPE_MISMATCH",
    ):
        monkeypatch.delenv(name, raising=False)

    assert Settings.from_env() == Settings()


def test_process_settings_are_loaded_once():
    assert get_settings() is get_settings()
