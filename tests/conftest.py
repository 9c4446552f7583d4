"""
Pytest configuration and shared fixtures for state-service tests.

This module provides:
- The sample to-do list initial state
- Ready-made services (default and error-isolating)
"""

import pytest

from state_service import ServiceConfig, StateService
from tests.fakes import ToDoItem, ToDoListState


@pytest.fixture
def init_state() -> ToDoListState:
    return ToDoListState(list=[ToDoItem(text="Fun demo", finished=False)])


@pytest.fixture
def service(init_state: ToDoListState) -> StateService[ToDoListState]:
    return StateService(init_state)


@pytest.fixture
def isolating_service(init_state: ToDoListState) -> StateService[ToDoListState]:
    return StateService(init_state, config=ServiceConfig(isolate_callback_errors=True))
