# budget_insights/loaders/base.py
from abc import ABC, abstractmethod


class BaseLoader(ABC):
    def __init__(self, config=None):
        self.config = config or {}

    @abstractmethod
    def load(self, file_path: str, owner_id=None):
        """
        Yield Transaction instances from file_path, stamped with owner_id.
        Rows that cannot be parsed are still yielded with their unusable
        fields set to None.
        """
        pass
