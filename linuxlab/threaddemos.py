"""Thread demonstrations: condition variables, mutexes, semaphores and joins."""

import threading
import time
from collections.abc import Callable
from typing import Any

MAX_FOODIE = 4
MAX_THR = 4

COOK = "cook noodles~~"
EAT = "eat noodles, delicious~~!"


class NoodleShop:
    """One chef and several foodies sharing a single bowl.

    The chef waits while a bowl is ready; foodies wait while none is.
    Every cook and eat is recorded in events, in order.
    """

    def __init__(self):
        self.noodles = 0
        self.events: list[str] = []
        self._lock = threading.Lock()
        self._foodie = threading.Condition(self._lock)
        self._chef = threading.Condition(self._lock)

    def cook(self) -> None:
        """Cook one bowl once the previous one has been eaten."""
        with self._chef:
            while self.noodles == 1:
                self._chef.wait()
            self.events.append(COOK)
            self.noodles += 1
            self._foodie.notify()

    def eat(self) -> None:
        """Eat one bowl once it has been cooked."""
        with self._foodie:
            while self.noodles == 0:
                self._foodie.wait()
            self.events.append(EAT)
            self.noodles -= 1
            self._chef.notify()

    def run(self, servings: int, foodies: int = MAX_FOODIE) -> list[str]:
        """Cook and eat servings bowls with a chef and foodies threads.

        Returns the events recorded during this run.
        """
        if servings < 0:
            raise ValueError("servings must not be negative")
        if foodies < 1:
            raise ValueError("at least one foodie is needed")
        start = len(self.events)

        def chef() -> None:
            for _ in range(servings):
                self.cook()

        def foodie(count: int) -> None:
            for _ in range(count):
                self.eat()

        share, extra = divmod(servings, foodies)
        threads = [
            threading.Thread(target=foodie, args=(share + (k < extra),))
            for k in range(foodies)
        ]
        threads.append(threading.Thread(target=chef))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return self.events[start:]


def _sell_tickets(tickets: int, workers: int, guard) -> list[int]:
    if workers < 1:
        raise ValueError("at least one worker is needed")
    if tickets < 0:
        raise ValueError("tickets must not be negative")
    remaining = tickets
    sold: list[int] = []

    def worker() -> None:
        nonlocal remaining
        while True:
            with guard:
                if remaining <= 0:
                    return
                sold.append(remaining)
                remaining -= 1
            time.sleep(0)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return sold


def sell_tickets_mutex(tickets: int = 100, workers: int = MAX_THR) -> list[int]:
    """Sell tickets from several threads under a mutex.

    Returns the ticket numbers in the order they were sold.
    """
    return _sell_tickets(tickets, workers, threading.Lock())


def sell_tickets_semaphore(tickets: int = 100, workers: int = 2) -> list[int]:
    """Sell tickets from several threads guarded by a binary semaphore."""
    return _sell_tickets(tickets, workers, threading.Semaphore(1))


def thread_result(func: Callable[..., Any], *args: Any) -> Any:
    """Run func(*args) in a new thread, join it and return its result.

    An exception raised in the thread is raised again in the caller.
    """
    outcome: dict[str, Any] = {}

    def target() -> None:
        try:
            outcome["value"] = func(*args)
        except BaseException as exc:
            outcome["error"] = exc

    thread = threading.Thread(target=target)
    thread.start()
    thread.join()
    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]