from typing import Any, Dict, List, Tuple


def compute_precision_recall_f1(actual_set, estimated_set):
    true_positives = len(actual_set & estimated_set)
    false_positives = len(estimated_set - actual_set)
    false_negatives = len(actual_set - estimated_set)

    precision = true_positives / (true_positives + false_positives) if (true_positives + false_positives) else 0.0
    recall    = true_positives / (true_positives + false_negatives) if (true_positives + false_negatives) else 0.0
    f1        = 2 * precision * recall / (precision + recall) if (precision + recall) else 0.0

    return precision, recall, f1


def compute_avg_absolute_error(actual_dict, estimated_dict):
    keys = set(actual_dict)
    abs_errors = [
        abs(float(estimated_dict.get(k, 0)) - float(actual_dict.get(k, 0)))
        for k in keys
    ]
    return sum(abs_errors) / len(abs_errors) if abs_errors else 0.0


def compute_topn_metrics(actual_top_n: List[Tuple[Any, Any]],
                         estimated_top_n: List[Tuple[Any, Any]]) -> Dict[str, Any]:
    """
    Compare two ranked lists of (key, count).

    exact_match is True only when both lists agree element by element,
    including the order of tied keys.
    """
    actual_dict = dict(actual_top_n)
    estimated_dict = dict(estimated_top_n)

    precision, recall, f1 = compute_precision_recall_f1(set(actual_dict), set(estimated_dict))
    avg_abs_error = compute_avg_absolute_error(actual_dict, estimated_dict)

    return {
        "precision": precision,
        "recall": recall,
        "f1_score": f1,
        "avg_absolute_error": avg_abs_error,
        "exact_match": list(actual_top_n) == list(estimated_top_n),
    }
