from pmcim.evaluators.base import Evaluator
from pmcim.evaluators.contraction import Contraction, contract_live_graph, select_pivot
from pmcim.evaluators.pmc import PMCConfig, PMCEvaluator, RoundState
