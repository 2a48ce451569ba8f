import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from order_console.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.toml"
DEFAULT_ORDER_TOPIC = "esb.prd.createServiceOrder"


class _Section(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class AppConfig(_Section):
    http_host_listen: str = Field(default="0.0.0.0", alias="HttpHostListen")
    http_port_listen: int = Field(default=8080, alias="HttpPortListen")
    app_name: str = Field(default="connectx-order-console", alias="AppName")
    instance: str = Field(default="", alias="Instance")
    common_config: str | None = Field(default=None, alias="CommonConfig")

    # Topic the order page publishes to unless told otherwise
    order_topic: str = Field(default=DEFAULT_ORDER_TOPIC, alias="OrderTopic")
    request_timeout_seconds: float = Field(default=30.0, alias="RequestTimeoutSeconds")

    @field_validator("common_config", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None so a blank CommonConfig means 'no common file'."""
        if v == "":
            return None
        return v


class LoggerConfig(_Section):
    log_dir: str = Field(default="logs", alias="LogDir")
    log_file_name: str = Field(default="order-console", alias="LogFileName")
    max_size_mb: int = Field(default=100, ge=1, alias="MaxSizeMB")
    max_backups: int = Field(default=10, ge=0, alias="MaxBackups")
    max_age_days: int = Field(default=30, ge=0, alias="MaxAgeDays")
    compress: bool = Field(default=False, alias="Compress")
    to_console: bool = Field(default=True, alias="ToConsole")
    level: str = Field(default="INFO", alias="Level")
    masking_regex_patterns: list[str] = Field(default_factory=list, alias="MaskingRegexPatterns")


class DatabaseConfig(_Section):
    url: str = Field(default="sqlite:///./order_console.db", alias="Url")
    echo: bool = Field(default=False, alias="Echo")


class KafkaConfig(_Section):
    enable_kafka: bool = Field(default=False, alias="EnableKafka")
    brokers: list[str] = Field(default_factory=list, alias="Brokers")
    listen_topics_list: list[str] = Field(default_factory=list, alias="ListenTopicsList")
    enable_tls: bool = Field(default=False, alias="EnableTLS")
    enable_sasl: bool = Field(default=False, alias="EnableSASL")
    ca_cert: str | None = Field(default=None, alias="CACert")
    client_signed_cert: str | None = Field(default=None, alias="ClientSignedCert")
    client_private_key: str | None = Field(default=None, alias="ClientPrivateKey")
    sasl_user: str | None = Field(default=None, alias="SASLUser")
    sasl_password: str | None = Field(default=None, alias="SASLPassword")
    automatically_create_topics: bool = Field(default=False, alias="AutomaticallyCreateTopics")
    default_number_of_partitions: int = Field(default=1, ge=1, alias="DefaultNumberOfPartitions")
    consumer_group: str = Field(default="order-console", alias="ConsumerGroup")
    send_timeout_seconds: float = Field(default=10.0, alias="SendTimeoutSeconds")


class TargetSystemReference(_Section):
    target_system: str = Field(alias="TargetSystem")
    module_name: str = Field(default="", alias="ModuleName")
    interface_type: str = Field(default="", alias="InterfaceType")
    kafka_topic_request: str = Field(default="", alias="KafkaTopicRequest")
    kafka_topic_response: str = Field(default="", alias="KafkaTopicResponse")
    http_url: str = Field(default="", alias="HTTPURL")
    action: str = Field(default="", alias="Action")


class EventTopicMapping(_Section):
    event_names: list[str] = Field(default_factory=list, alias="EventNames")
    topic_name: str = Field(alias="TopicName")
    module_name: str = Field(default="", alias="ModuleName")
    table_name: str = Field(default="", alias="MongoTable")


class Settings(_Section):
    """Full console configuration: the main TOML file with the common file merged in."""

    app: AppConfig = Field(default_factory=AppConfig, alias="App")
    logger: LoggerConfig = Field(default_factory=LoggerConfig, alias="Logger")
    database: DatabaseConfig = Field(default_factory=DatabaseConfig, alias="Database")
    kafka: KafkaConfig = Field(default_factory=KafkaConfig, alias="Kafka")
    target_system_reference: list[TargetSystemReference] = Field(
        default_factory=list, alias="TargetSystemReference"
    )

    # Shared lookup tables from the common config file
    module_table: dict[str, str] = Field(default_factory=dict, alias="ModuleTable")
    remap_kafka_topic_name: dict[str, str] = Field(default_factory=dict, alias="RemapKafkaTopicName")
    event_topic_mapping: list[EventTopicMapping] = Field(default_factory=list, alias="EventTopicMapping")

    def resolve_topic(self, topic: str) -> str:
        """Apply the common topic remapping table to a topic name."""
        return self.remap_kafka_topic_name.get(topic, topic)


class EnvSettings(BaseSettings):
    """Process-level settings read from the environment (or a .env file)."""

    config_path: str = Field(default=DEFAULT_CONFIG_PATH, alias="CONSOLE_CONFIG")

    # Overrides [Database].Url, mainly for deployments and tests
    database_url: str | None = Field(default=None, alias="DATABASE_URL")

    @field_validator("database_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        if v == "":
            return None
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as fh:
        return tomllib.load(fh)


def _merge_common(config: dict[str, Any], common_path: Path) -> None:
    """Merge the shared lookup tables of the common file into ``config`` in place."""
    try:
        common = _read_toml(common_path)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Could not load common config from %s: %s", common_path, exc)
        return

    for key in ("ModuleTable", "RemapKafkaTopicName", "EventTopicMapping"):
        if key in common:
            config[key] = common[key]
    # The main file wins for sections it defines itself
    if "Logger" in common and "Logger" not in config:
        config["Logger"] = common["Logger"]


def load_settings(
    config_path: str | Path | None = None, env: EnvSettings | None = None
) -> Settings:
    """
    Load the console configuration.

    Reads the main TOML file, merges the common file named by
    ``App.CommonConfig`` (resolved relative to the main file) and applies
    environment overrides.

    Raises:
        ConfigError: If the main file is missing, is not valid TOML or
            does not match the expected structure.
    """
    env = env or EnvSettings()
    path = Path(config_path or env.config_path)

    try:
        raw = _read_toml(path)
    except OSError as exc:
        raise ConfigError(f"Failed to load configuration from {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    # Malformed sections are left for Settings validation to report
    app = raw.get("App")
    common_name = app.get("CommonConfig") if isinstance(app, dict) else None
    if common_name and isinstance(common_name, str):
        _merge_common(raw, path.parent / common_name)

    if env.database_url:
        database = raw.setdefault("Database", {})
        if isinstance(database, dict):
            database["Url"] = env.database_url

    try:
        settings = Settings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {path}: {exc}") from exc

    logger.info(
        "Configuration loaded: app=%s kafka_brokers=%d log_file=%s",
        settings.app.app_name,
        len(settings.kafka.brokers),
        settings.logger.log_file_name,
    )
    return settings
