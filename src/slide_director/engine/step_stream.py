"""Live fan-out of agent steps to observers."""

import logging
from typing import Callable, List

from slide_director.domain.agent_step import AgentStep

logger = logging.getLogger(__name__)

StepObserver = Callable[[AgentStep], None]


class StepStream:
    """
    Buffers the steps of the active run and forwards each one immediately.

    Observer failures are logged and do not disturb the run.
    """

    def __init__(self) -> None:
        self._steps: List[AgentStep] = []
        self._observers: List[StepObserver] = []

    @property
    def steps(self) -> List[AgentStep]:
        return list(self._steps)

    def subscribe(self, observer: StepObserver) -> Callable[[], None]:
        """
        Registers an observer.

        Args:
            observer: Callable receiving each step as it happens.

        Returns:
            A callable that removes the observer again.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def emit(self, step: AgentStep) -> None:
        self._steps.append(step)
        for observer in list(self._observers):
            try:
                observer(step)
            except Exception:
                logger.exception("Step observer failed on %s step", step.kind.value)

    def clear(self) -> None:
        self._steps.clear()
