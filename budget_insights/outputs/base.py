# budget_insights/outputs/base.py
from abc import ABC, abstractmethod


class BaseOutput(ABC):
    @abstractmethod
    def write(self, report, goals=None):
        """Render an EvaluationReport (and optional savings goals)."""
        pass
