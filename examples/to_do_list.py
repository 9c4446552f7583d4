"""To-do list walkthrough for StateService.

Run with ``python examples/to_do_list.py``. DEBUG logging is enabled so the
subscriber keys are printed after every subscribe/unsubscribe.
"""

import logging
from dataclasses import dataclass, field, replace

from state_service import StateService


@dataclass(frozen=True, order=True)
class ToDoItem:
    text: str
    finished: bool = False


@dataclass(frozen=True, order=True)
class ToDoListState:
    items: tuple[ToDoItem, ...] = field(default_factory=tuple)

    def add_item(self, text: str) -> "ToDoListState":
        return replace(self, items=self.items + (ToDoItem(text),))


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    init_state = ToDoListState((ToDoItem("Fun demo"),))
    service = StateService(init_state)

    print(f"\n[ Wison ] should get the last state: {init_state}")
    wison = service.subscribe(lambda state: print(f"Wison >>> I got next state: {state}"))

    latest_state = service.get_latest_state().add_item("Learn Polkadot").add_item("Learn Bitcoin")
    service.emit(latest_state)

    print(f"\n[ Fion ] should get the last state: {latest_state}")
    fion = service.subscribe(lambda state: print(f"Fion >>> I got next state: {state}"))

    latest_state = latest_state.add_item("Write a demo")
    service.emit(latest_state)

    fion.unsubscribe(service)

    latest_state = latest_state.add_item("Final")
    service.emit(latest_state)

    wison.unsubscribe(service)

    latest_state = latest_state.add_item("No one should see that")
    service.emit(latest_state)
    service.emit(latest_state)

    print(f"\nLatest state: {service.get_latest_state()}")


if __name__ == "__main__":
    main()
