from rubik_core.solve.iddfs_solver import IDDFSSolver, iddfs, iddfs_solve
from rubik_core.solve.layered_solver import LayerByLayerSolver
from rubik_core.solve.solver import STRATEGIES, get_solver, solve
from rubik_core.solve.strategy import SolverStrategy

__all__ = [
    "IDDFSSolver",
    "LayerByLayerSolver",
    "STRATEGIES",
    "SolverStrategy",
    "get_solver",
    "iddfs",
    "iddfs_solve",
    "solve",
]
