from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

InputT = TypeVar("InputT")


class BaseInputGenerator(ABC, Generic[InputT]):
    """Abstract base class for feedback-driven input generators."""

    @abstractmethod
    def has_more(self) -> bool:
        """
        Report whether another input can be generated.

        :return: True while inputs remain pending.
        """

    @abstractmethod
    def generate(self) -> Optional[InputT]:
        """
        Hand out the next input to execute.

        :return: The next input, or None when nothing is pending.
        """

    @abstractmethod
    def record(self, input_value: InputT, coverage: object, state: bytes) -> None:
        """
        Feed back the outcome of executing a previously generated input.

        :param input_value: The input that was executed.
        :param coverage: Branch coverage observed for the input.
        :param state: Final state snapshot of the target.
        """


class BaseInputGeneratorConfig(ABC):
    """Abstract base class for input generator configurations."""
