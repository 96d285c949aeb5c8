"""
Evaluation API controllers.
"""

from aicte_portal.evaluations.api.evaluations import EvaluationController
from aicte_portal.evaluations.api.evaluator import EvaluatorController
from aicte_portal.evaluations.api.profiles import EvaluatorProfileController

__all__ = ["EvaluationController", "EvaluatorController", "EvaluatorProfileController"]
