from typing import Any, Dict, List

from counters.multiset import Multiset
from metrics.divergence import compute_jsd
from metrics.entropy import compute_entropy, normalize_entropy, relative_frequencies
from metrics.metric_utils import compute_topn_metrics
from runners.method_runner_base import RankingRunnerBase


def evaluate_method(
    method_name: str,
    runner: RankingRunnerBase,
    windows: List[Dict[str, Any]],
    verbose: bool = True,
    plot_est: bool = False,
    save_info=('./plots', 'png')
) -> List[Dict[str, Any]]:
    """
    Evaluate a ranking runner across a sequence of windows.

    Args:
        method_name: Identifier for the method (e.g., 'bounded_topk').
        runner: An instance of a class implementing RankingRunnerBase.
        windows: Output of data.generate_data.prepare_windows: dicts with
            'type', 'n', 'truth' (Multiset) and 'partitions' ({id: stream}).
        verbose: Whether to print progress.
        plot_est: Whether to plot actual vs ranked top-n per window.
    Returns:
        List of dicts with evaluation metrics for each window.
    """
    results = []

    for window_id, window in enumerate(windows):
        runner.initialize_counters(window_id=window_id)
        partitions = window['partitions']
        if verbose:
            total_events = sum(len(stream) for stream in partitions.values())
            print(f"\n[{method_name}] Window {window_id + 1}: {total_events} events "
                  f"over {len(partitions)} partitions")

        for partition_id, stream in partitions.items():
            for element in stream:
                runner.insert_item(partition_id, element)

        summary = runner.finalize_window(window_id)

        truth: Multiset = window['truth']
        actual_top_n = truth.most_common_ordered()[:window['n']]
        estimated_top_n = summary['top_n']
        metrics = compute_topn_metrics(actual_top_n, estimated_top_n)

        entropy = compute_entropy(relative_frequencies(truth))
        # Count-weighted disagreement of the two top-n lists, 0.0 when identical
        top_n_jsd = compute_jsd(dict(actual_top_n), dict(estimated_top_n))

        if verbose and not metrics['exact_match']:
            print(f"  ranking differs from ground truth (precision={metrics['precision']:.3f}, "
                  f"recall={metrics['recall']:.3f})")

        if plot_est and (actual_top_n or estimated_top_n):
            from visualisation.result_visualiser import plot_actual_vs_estimated
            plot_actual_vs_estimated(actual_top_n, estimated_top_n, window_id, method_name, save_info)

        results.append({
            "window": window_id + 1,
            "distribution": window['type'],
            "n": window['n'],
            "distinct_keys": summary['distinct_keys'],
            "actual_top_n": actual_top_n,
            "estimated_top_n": estimated_top_n,
            "entropy": entropy,
            "norm_entropy": normalize_entropy(entropy, len(truth)),
            "top_n_jsd": top_n_jsd,
            "rank_seconds": summary['rank_seconds'],
            **metrics
        })

    return results
