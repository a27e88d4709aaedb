"""Services for marshall."""

from marshall.services.collector import collect_outcomes
from marshall.services.dispatcher import Dispatcher
from marshall.services.evaluator import check_threshold, evaluate, success_rate
from marshall.services.executor import SSHExecutor

__all__ = [
    "Dispatcher",
    "SSHExecutor",
    "check_threshold",
    "collect_outcomes",
    "evaluate",
    "success_rate",
]
