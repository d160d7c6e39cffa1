"""
barbershop/services/events.py

Event emitter: pushes events to a Redis queue for the delivery worker.

Queue:
- events:p2p: per-user notifications (email / SMS), delivered in order
"""

import json
import time
import logging

from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

P2P_QUEUE = "events:p2p"


def emit_event(redis: Redis, event_type: str, payload: dict) -> bool:
    """
    Emit a p2p event.

    Pushed to Redis list `events:p2p` for the consumer loop.
    Returns False (and logs) when the push fails; never raises.
    """
    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis.rpush(P2P_QUEUE, json.dumps(event))
        logger.info(f"Event emitted: {event_type} → {P2P_QUEUE}")
        return True
    except (RedisError, OSError) as e:
        logger.error(f"Failed to emit event {event_type}: {e}")
        return False
