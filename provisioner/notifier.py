import logging
import time
from typing import Callable

import requests

from .errors import DeliveryFailure
from .models import DeliveryOutcome

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BASE_DELAY = 1.0

def delay_for(attempt: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Wait after failed attempt number `attempt` (1-based): 1s, 2s, 4s, 8s, ..."""
    return base_delay * 2 ** (attempt - 1)

class Notifier:
    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY,
        timeout: float = 20,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.max_attempts = max(1, max_attempts)
        self.base_delay = base_delay
        self.timeout = timeout
        self.sleep = sleep

    def notify(self, url: str, payload: dict) -> DeliveryOutcome:
        """POST payload as JSON to url, retrying with backoff. Never raises."""
        headers = {"Content-Type": "application/json"}
        outcome = DeliveryOutcome(url=url)
        for attempt in range(1, self.max_attempts + 1):
            outcome.attempts = attempt
            try:
                logger.info("POST %s attempt %d/%d payload keys: %s", url, attempt, self.max_attempts, list(payload.keys()))
                r = requests.post(url, json=payload, headers=headers, timeout=self.timeout)
                if 200 <= r.status_code < 300:
                    logger.info("delivered to %s: status=%d", url, r.status_code)
                    outcome.delivered = True
                    outcome.last_error = None
                    return outcome
                outcome.last_error = f"HTTP {r.status_code}"
            except requests.RequestException as e:
                outcome.last_error = f"{type(e).__name__}: {e}"
            logger.warning("delivery attempt %d to %s failed: %s", attempt, url, outcome.last_error)
            if attempt < self.max_attempts:
                delay = delay_for(attempt, self.base_delay)
                logger.info("sleep %.1fs before retry", delay)
                self.sleep(delay)
        failure = DeliveryFailure(f"giving up on {url} after {outcome.attempts} attempts: {outcome.last_error}")
        logger.error("%s", failure)
        return outcome
