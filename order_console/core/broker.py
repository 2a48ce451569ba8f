import json
import logging
from collections.abc import Callable
from typing import Any

from kafka import KafkaAdminClient, KafkaProducer
from kafka.admin import NewTopic
from kafka.errors import KafkaError, TopicAlreadyExistsError

from order_console.core.config import KafkaConfig
from order_console.errors import BrokerError, BrokerUnavailableError

logger = logging.getLogger(__name__)


def _serialize(message: Any) -> bytes:
    if isinstance(message, bytes):
        return message
    if isinstance(message, str):
        return message.encode("utf-8")
    return json.dumps(message).encode("utf-8")


def connection_options(config: KafkaConfig) -> dict[str, Any]:
    """Client options shared by the producer and the admin client."""
    options: dict[str, Any] = {
        "bootstrap_servers": config.brokers,
        "client_id": config.consumer_group,
    }

    if config.enable_tls:
        options.update(
            ssl_cafile=config.ca_cert,
            ssl_certfile=config.client_signed_cert,
            ssl_keyfile=config.client_private_key,
            ssl_check_hostname=False,
        )
    if config.enable_sasl:
        options.update(
            sasl_mechanism="SCRAM-SHA-256",
            sasl_plain_username=config.sasl_user,
            sasl_plain_password=config.sasl_password,
        )

    if config.enable_tls and config.enable_sasl:
        options["security_protocol"] = "SASL_SSL"
    elif config.enable_tls:
        options["security_protocol"] = "SSL"
    elif config.enable_sasl:
        options["security_protocol"] = "SASL_PLAINTEXT"
    else:
        options["security_protocol"] = "PLAINTEXT"
    return options


class KafkaBroker:
    """Publishes order messages to Kafka topics.

    The producer is created by ``connect``; ``producer_factory`` and
    ``admin_factory`` exist so tests can substitute fakes.
    """

    def __init__(
        self,
        config: KafkaConfig,
        producer_factory: Callable[..., Any] = KafkaProducer,
        admin_factory: Callable[..., Any] = KafkaAdminClient,
    ):
        self.config = config
        self._producer_factory = producer_factory
        self._admin_factory = admin_factory
        self._producer = None

    @property
    def is_ready(self) -> bool:
        return self._producer is not None

    def connect(self) -> None:
        """Create the producer (and topics, if configured).

        Does nothing when Kafka is disabled in the configuration.

        Raises:
            BrokerError: If the client cannot be created
        """
        if not self.config.enable_kafka:
            logger.warning("Kafka is disabled in configuration")
            return

        options = connection_options(self.config)
        logger.info(
            "Initializing Kafka connection: brokers=%s tls=%s sasl=%s",
            self.config.brokers,
            self.config.enable_tls,
            self.config.enable_sasl,
        )
        try:
            if self.config.automatically_create_topics and self.config.listen_topics_list:
                self._create_topics(options)
            self._producer = self._producer_factory(value_serializer=_serialize, **options)
        except KafkaError as e:
            raise BrokerError(f"Kafka initialization failed: {e}") from e
        logger.info("Kafka connected: brokers=%d", len(self.config.brokers))

    def _create_topics(self, options: dict[str, Any]) -> None:
        admin = self._admin_factory(**options)
        topics = [
            NewTopic(
                name=topic,
                num_partitions=self.config.default_number_of_partitions,
                replication_factor=1,
            )
            for topic in self.config.listen_topics_list
        ]
        try:
            admin.create_topics(new_topics=topics, validate_only=False)
            logger.info("Created topics %s", self.config.listen_topics_list)
        except TopicAlreadyExistsError:
            logger.info("Topics already exist, skipping creation")
        finally:
            admin.close()

    def send(self, topic: str, message: Any, key: str | None = None) -> None:
        """
        Publish ``message`` to ``topic`` and wait for the broker acknowledgement.

        Raises:
            BrokerUnavailableError: If the producer is not connected
            BrokerError: If the broker rejects or times out the message
        """
        if self._producer is None:
            raise BrokerUnavailableError("Kafka producer not initialized")

        try:
            future = self._producer.send(
                topic,
                value=message,
                key=key.encode("utf-8") if key else None,
            )
            future.get(timeout=self.config.send_timeout_seconds)
        except KafkaError as e:
            logger.error("Failed to send message to topic %s: %s", topic, e)
            raise BrokerError(f"Failed to send message to topic {topic}") from e
        logger.debug("Message sent to topic %s (key=%s)", topic, key)

    def close(self) -> None:
        if self._producer is None:
            return
        logger.info("Disconnecting from Kafka")
        try:
            self._producer.flush()
            self._producer.close()
        finally:
            self._producer = None
