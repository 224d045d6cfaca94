from cky.evaluation.evaluator import evaluate

__all__ = ["evaluate"]
