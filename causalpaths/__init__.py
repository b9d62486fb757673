from .dag import DAG
from .model import MediationModel, Mediator, mediation_dag, MEDIATORS, COLUMNS, NODE_POSITIONS
from .effects import total_effect, path_effects, indirect_effect
from .simulate import simulate, generate_data
from .estimators.paths import PathRegression, PathRegressionResult
from .checks import Check, CheckReport, PathCheckReport
from ._exceptions import GraphError, SpecificationError

__all__ = [
    "DAG",
    "MediationModel", "Mediator", "mediation_dag", "MEDIATORS", "COLUMNS", "NODE_POSITIONS",
    "total_effect", "path_effects", "indirect_effect",
    "simulate", "generate_data",
    "PathRegression", "PathRegressionResult",
    "Check", "CheckReport", "PathCheckReport",
    "GraphError", "SpecificationError",
]
