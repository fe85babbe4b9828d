import time
from collections import deque
from typing import Any, Callable, Iterable, List, Optional

from ape import chain
from ape.contracts import ContractInstance
from eth_abi import encode
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from deployment.constants import EVENT_POLL_INTERVAL, POOL_CREATED_EVENT, POOL_CREATION_TIMEOUT
from deployment.exceptions import EventTimeout


def encode_pool_data(token_a: ChecksumAddress, token_b: ChecksumAddress) -> bytes:
    """ABI-encodes a token pair as expected by the SyncSwap pool factories."""
    return encode(["address", "address"], [token_a, token_b])


class EventSubscription:
    """
    One-shot subscription to a contract event.

    Entering the context records the current block; logs are then taken from
    any receipt fed to the subscription and from blocks mined afterwards.
    Callbacks only fire while subscribed, and leaving the context (or the
    end of `wait`, whichever way it ends) unsubscribes.
    """

    def __init__(
        self,
        event,
        match: Optional[Callable[[Any], bool]] = None,
        poll_interval: float = EVENT_POLL_INTERVAL,
        get_height: Optional[Callable[[], int]] = None,
    ):
        self.event = event
        self.match = match or (lambda log: True)
        self.poll_interval = poll_interval
        self._get_height = get_height or (lambda: chain.blocks.height)
        self._callbacks: List[Callable[[Any], None]] = list()
        self._pending = deque()
        self._next_block = None
        self.active = False

    def __enter__(self) -> "EventSubscription":
        self._next_block = self._get_height() + 1
        self.active = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unsubscribe()

    def on_log(self, callback: Callable[[Any], None]) -> None:
        self._callbacks.append(callback)

    def unsubscribe(self) -> None:
        self.active = False
        self._callbacks.clear()
        self._pending.clear()

    def feed(self, logs: Iterable[Any]) -> None:
        """Queues logs already known to the caller, such as those of a confirmed receipt."""
        self._pending.extend(logs)

    def dispatch(self, log: Any) -> bool:
        """Delivers a log to the callbacks; returns False once unsubscribed."""
        if not self.active:
            return False
        for callback in list(self._callbacks):
            callback(log)
        return True

    def _poll(self) -> List[Any]:
        height = self._get_height()
        if height < self._next_block:
            return []
        logs = list(self.event.range(self._next_block, height + 1))
        self._next_block = height + 1
        return logs

    def wait(self, timeout: float) -> Any:
        """Returns the first matching log, or raises EventTimeout once the window has passed."""
        if not self.active:
            raise RuntimeError("Subscription is not active.")

        deadline = time.monotonic() + timeout
        try:
            while True:
                self._pending.extend(self._poll())
                while self._pending:
                    log = self._pending.popleft()
                    if self.match(log):
                        self.dispatch(log)
                        return log
                if time.monotonic() >= deadline:
                    raise EventTimeout(
                        f"Timeout: {self.event.name} event not received within {timeout}s"
                    )
                time.sleep(self.poll_interval)
        finally:
            self.unsubscribe()


def _is_pair(log: Any, token_a: ChecksumAddress, token_b: ChecksumAddress) -> bool:
    tokens = {token_a.lower(), token_b.lower()}
    arguments = log.event_arguments
    return {arguments["token0"].lower(), arguments["token1"].lower()} == tokens


def create_pool(
    transactor,
    router: ContractInstance,
    factory: ContractInstance,
    token_a: ChecksumAddress,
    token_b: ChecksumAddress,
    timeout: float = POOL_CREATION_TIMEOUT,
) -> ChecksumAddress:
    """
    Creates a classic pool for a token pair through the router and returns its address.
    The address comes from the PoolCreated log of the confirmed transaction, or
    from a PoolCreated event mined afterwards.
    """
    data = encode_pool_data(token_a, token_b)
    event = getattr(factory, POOL_CREATED_EVENT)

    subscription = EventSubscription(event, match=lambda log: _is_pair(log, token_a, token_b))
    with subscription:
        subscription.on_log(
            lambda log: print(
                f"{POOL_CREATED_EVENT} event received: "
                f"token0: {log.event_arguments['token0']}, "
                f"token1: {log.event_arguments['token1']}, "
                f"pool: {log.event_arguments['pool']}"
            )
        )
        receipt = transactor.transact(router.createPool, factory.address, data)
        subscription.feed(receipt.decode_logs(event))
        log = subscription.wait(timeout=timeout)

    return to_checksum_address(log.event_arguments["pool"])
