"""Presenter interface for what the run command reports to the user."""

from abc import ABC, abstractmethod


class IPresenter(ABC):
    """Reports run failures and configuration problems."""

    @abstractmethod
    def print_error(self, message: str) -> None: ...

    @abstractmethod
    def print_warning(self, message: str) -> None: ...
