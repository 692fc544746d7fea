import json
import logging
from kafka import KafkaProducer
from storefront.core.config import settings

logger = logging.getLogger(__name__)

_producer = None

def _get_producer() -> KafkaProducer:
    global _producer
    if _producer is None:
        _producer = KafkaProducer(
            bootstrap_servers=[settings.KAFKA_BOOTSTRAP],
            value_serializer=lambda v: json.dumps(v).encode("utf-8"),
            key_serializer=lambda v: (v.encode("utf-8") if isinstance(v, str) else v),
            linger_ms=5,
            retries=3,
        )
    return _producer

def emit(event: dict):
    """Emit to order.events (configurable), keyed by order id."""
    if not settings.ORDER_EVENTS_ENABLED:
        logger.debug("Order events disabled, dropping %s", event.get("type"))
        return
    p = _get_producer()
    p.send(settings.TOPIC_ORDER_EVENTS, key=str(event.get("order_id", "")), value=event)
    p.flush(5)

def get_event_sink():
    return emit
