import pytest

from webdriver_client.config.config import ClientConfig
from webdriver_client.infrastructure import config_loader


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in (*config_loader.ENV_OVERRIDES, config_loader.CONFIG_ENV_VAR):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_loader, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.chdir(tmp_path)


def test_load_reads_yaml_file(tmp_path):
    path = tmp_path / "webdriver.yaml"
    path.write_text(
        "host: grid.local\n"
        "port: 4445\n"
        "browser: chrome\n"
        "timeout: 30\n"
        "capabilities:\n"
        "  goog:chromeOptions:\n"
        "    args: [headless]\n"
    )

    config = config_loader.load(str(path))

    assert config == ClientConfig(
        host="grid.local",
        port=4445,
        browser="chrome",
        timeout=30.0,
        capabilities={"goog:chromeOptions": {"args": ["headless"]}},
    )


def test_load_substitutes_environment_variables(tmp_path, monkeypatch):
    monkeypatch.setenv("GRID_HOST", "remote-grid")
    (tmp_path / "webdriver.yaml").write_text("host: ${GRID_HOST}\nstart_url: ${UNSET_VARIABLE_XYZ}\n")

    config = config_loader.load()

    assert config.host == "remote-grid"
    assert config.start_url == "${UNSET_VARIABLE_XYZ}"


def test_config_is_found_in_parent_directory(tmp_path, monkeypatch):
    (tmp_path / "webdriver.yaml").write_text("browser: edge\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert config_loader.find_config_path() == str(tmp_path / "webdriver.yaml")
    assert config_loader.load().browser == "edge"


def test_env_var_points_at_config(tmp_path, monkeypatch):
    other = tmp_path / "other.yaml"
    other.write_text("port: 5555\n")
    monkeypatch.setenv(config_loader.CONFIG_ENV_VAR, str(other))

    assert config_loader.load().port == 5555


def test_env_var_pointing_nowhere_raises(tmp_path, monkeypatch):
    monkeypatch.setenv(config_loader.CONFIG_ENV_VAR, str(tmp_path / "missing.yaml"))

    with pytest.raises(FileNotFoundError):
        config_loader.find_config_path()


def test_environment_overrides_win_over_file(tmp_path, monkeypatch):
    (tmp_path / "webdriver.yaml").write_text("host: file-host\nport: 4444\n")
    monkeypatch.setenv("SELENIUM_HOST", "env-host")
    monkeypatch.setenv("SELENIUM_PORT", "4446")

    config = config_loader.load()

    assert (config.host, config.port) == ("env-host", 4446)


def test_empty_file_gives_defaults(tmp_path):
    (tmp_path / "webdriver.yaml").write_text("")

    assert config_loader.load() == ClientConfig()


def test_non_mapping_file_is_rejected(tmp_path):
    (tmp_path / "webdriver.yaml").write_text("- a\n- b\n")

    with pytest.raises(ValueError):
        config_loader.load()


def test_load_without_file_raises():
    with pytest.raises(FileNotFoundError):
        config_loader.load()


def test_load_or_default_without_file(monkeypatch):
    monkeypatch.setenv("SELENIUM_BROWSER", "chrome")

    assert config_loader.load_or_default() == ClientConfig(browser="chrome")


def test_load_or_default_with_explicit_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        config_loader.load_or_default(str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize("kwargs", [{"port": 0}, {"port": 70000}, {"timeout": -1}])
def test_client_config_validation(kwargs):
    with pytest.raises(ValueError):
        ClientConfig(**kwargs)


def test_client_config_base_url():
    assert ClientConfig(host="grid", port=4445).base_url == "http://grid:4445"


def test_server_wait_is_separate_from_request_timeout(tmp_path):
    (tmp_path / "webdriver.yaml").write_text("timeout: 5\nserver_wait: 120\n")

    config = config_loader.load()

    assert (config.timeout, config.server_wait) == (5.0, 120.0)
    assert config_loader.load_or_default(str(tmp_path / "webdriver.yaml")).server_wait == 120.0
    with pytest.raises(ValueError):
        ClientConfig(server_wait=-1)
