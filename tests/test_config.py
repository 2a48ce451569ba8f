import logging
from pathlib import Path

import pytest

from order_console.core.config import EnvSettings, Settings, load_settings
from order_console.errors import ConfigError

ROOT = Path(__file__).resolve().parent.parent

MAIN = """
[App]
AppName = "console-test"
HttpPortListen = 9090
CommonConfig = "common.toml"

[Logger]
LogDir = "logs"
LogFileName = "console"
MaxSizeMB = 5
MaxBackups = 3
MaxAgeDays = 7
MaskingRegexPatterns = ["secret\\\\w+"]

[Database]
Url = "sqlite:///./main.db"

[Kafka]
EnableKafka = true
Brokers = ["k1:9092", "k2:9092"]
EnableSASL = true
SASLUser = "svc"
SASLPassword = "pw"
"""

COMMON = """
[ModuleTable]
serviceOrder = "SOM"

[RemapKafkaTopicName]
"orders.in" = "orders.in.v2"

[[EventTopicMapping]]
EventNames = ["ServiceOrderCreateEvent"]
TopicName = "orders.events"
ModuleName = "serviceOrder"

[Logger]
LogFileName = "from-common"
"""


def _env(**overrides) -> EnvSettings:
    return EnvSettings.model_validate(overrides)


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "config.toml").write_text(MAIN)
    (tmp_path / "common.toml").write_text(COMMON)
    return tmp_path


def test_load_settings_merges_common(config_dir):
    settings = load_settings(config_dir / "config.toml", env=_env())

    assert settings.app.app_name == "console-test"
    assert settings.app.http_port_listen == 9090
    assert settings.kafka.brokers == ["k1:9092", "k2:9092"]
    assert settings.kafka.enable_sasl is True
    assert settings.module_table == {"serviceOrder": "SOM"}
    assert settings.event_topic_mapping[0].topic_name == "orders.events"
    assert settings.resolve_topic("orders.in") == "orders.in.v2"
    assert settings.resolve_topic("other") == "other"


def test_main_logger_wins_over_common(config_dir):
    settings = load_settings(config_dir / "config.toml", env=_env())

    assert settings.logger.log_file_name == "console"
    assert settings.logger.max_size_mb == 5
    assert settings.logger.masking_regex_patterns == ["secret\\w+"]


def test_common_logger_used_when_main_has_none(tmp_path):
    main = MAIN.split("[Logger]")[0] + "[Database]\nUrl = \"sqlite://\"\n"
    (tmp_path / "config.toml").write_text(main)
    (tmp_path / "common.toml").write_text(COMMON)

    settings = load_settings(tmp_path / "config.toml", env=_env())

    assert settings.logger.log_file_name == "from-common"


def test_missing_common_file_is_not_fatal(tmp_path, caplog):
    (tmp_path / "config.toml").write_text(MAIN)

    with caplog.at_level(logging.WARNING, logger="order_console.core.config"):
        settings = load_settings(tmp_path / "config.toml", env=_env())

    assert settings.module_table == {}
    assert settings.remap_kafka_topic_name == {}
    assert "Could not load common config" in caplog.text


def test_missing_main_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "nope.toml", env=_env())


def test_invalid_toml_raises(tmp_path):
    (tmp_path / "config.toml").write_text("[App\nAppName = ")

    with pytest.raises(ConfigError):
        load_settings(tmp_path / "config.toml", env=_env())


def test_invalid_value_raises(tmp_path):
    (tmp_path / "config.toml").write_text('[App]\nHttpPortListen = "not-a-port"\n')

    with pytest.raises(ConfigError):
        load_settings(tmp_path / "config.toml", env=_env())


def test_database_url_override(config_dir):
    settings = load_settings(
        config_dir / "config.toml", env=_env(DATABASE_URL="sqlite:///./override.db")
    )

    assert settings.database.url == "sqlite:///./override.db"


def test_config_path_from_environment(config_dir, monkeypatch):
    monkeypatch.setenv("CONSOLE_CONFIG", str(config_dir / "config.toml"))

    settings = load_settings()

    assert settings.app.app_name == "console-test"


def test_defaults_without_sections(tmp_path):
    (tmp_path / "config.toml").write_text("")

    settings = load_settings(tmp_path / "config.toml", env=_env())

    assert settings == Settings()
    assert settings.kafka.enable_kafka is False
    assert settings.app.order_topic == "esb.prd.createServiceOrder"


def test_shipped_example_config_loads():
    settings = load_settings(ROOT / "config" / "config.toml", env=_env())

    assert settings.app.app_name == "connectx-order-console"
    assert settings.module_table["serviceOrder"] == "SOM"
    assert settings.target_system_reference[0].target_system == "ESB"


@pytest.mark.parametrize(
    "content",
    [
        'App = "oops"\n',
        '[App]\nCommonConfig = 5\n',
        'Database = "oops"\n',
    ],
)
def test_malformed_section_raises(tmp_path, content):
    (tmp_path / "config.toml").write_text(content)

    with pytest.raises(ConfigError):
        load_settings(tmp_path / "config.toml", env=_env(DATABASE_URL="sqlite:///./override.db"))
