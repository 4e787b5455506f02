from typing import Any, Dict, List, Tuple

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from visualisation.data_visualiser import save_or_show


def plot_actual_vs_estimated(actual_top_n: List[Tuple[Any, Any]], estimated_top_n: List[Tuple[Any, Any]],
                             window: int, desc: str, save_info=('./plots', 'png')):
    """
    Side-by-side bars of the ground-truth ranking and a runner's ranking for one window.
    """
    actual_dict = {k: float(c) for k, c in actual_top_n}
    estimated_dict = {k: float(c) for k, c in estimated_top_n}
    combined_keys = [k for k, _ in actual_top_n] + [k for k, _ in estimated_top_n if k not in actual_dict]

    actual_vals = [actual_dict.get(k, 0.0) for k in combined_keys]
    estimated_vals = [estimated_dict.get(k, 0.0) for k in combined_keys]

    plt.figure(figsize=(14, 7), facecolor='white')
    ax = plt.gca()
    ax.set_facecolor('#f5f6f7')

    width = 0.4
    x = range(len(combined_keys))
    actual_colors = ['#e74c3c' if k in estimated_dict else '#95a5a6' for k in combined_keys]
    ax.bar(x, actual_vals, width, color=actual_colors, edgecolor='#7f8c8d',
           linewidth=0.5, alpha=0.9, label='Actual')
    ax.bar([i + width for i in x], estimated_vals, width,
           color='#3498db', edgecolor='#2980b9', linewidth=0.5, alpha=0.9, label='Ranked')

    ax.yaxis.grid(True, linestyle='--', linewidth=0.5, alpha=0.7)
    for spine in ['top', 'right']:
        ax.spines[spine].set_visible(False)

    max_val = max(actual_vals + estimated_vals, default=0.0)
    ax.set_ylim(0, int((max_val * 1.15) // 10 + 1) * 10)

    ax.set_ylabel('Absolute Frequency (f)', fontsize=10, labelpad=10)
    ax.set_title(f'Window {window + 1} - Actual vs {desc} Top-N',
                 fontsize=14, pad=20, fontweight='bold')
    ax.set_xticks([i + width / 2 for i in x])
    if len(combined_keys) > 20:
        ax.set_xticklabels([str(k) for k in combined_keys], rotation=90, fontsize=8, ha='center')
    else:
        ax.set_xticklabels([str(k) for k in combined_keys], fontsize=9)

    hit_patch = mpatches.Patch(color='#e74c3c', label='Actual, also ranked')
    miss_patch = mpatches.Patch(color='#95a5a6', label='Actual, missing from ranking')
    ranked_patch = mpatches.Patch(color='#3498db', label=desc)
    ax.legend(handles=[hit_patch, miss_patch, ranked_patch],
              loc="upper right", framealpha=1, facecolor='white')

    plt.tight_layout()
    return save_or_show(f"w {window + 1} {desc}", save_info)


def plot_ranking_times(results_by_method: Dict[str, List[Dict[str, Any]]], save_info=('./plots', 'png')):
    """
    Ranking time per window for each evaluated method.
    """
    plt.figure(figsize=(14, 7), facecolor='white')
    ax = plt.gca()
    ax.set_facecolor('#f5f6f7')

    for method_name, results in results_by_method.items():
        windows = [r["window"] for r in results]
        times_ms = [r["rank_seconds"] * 1000 for r in results]
        ax.plot(windows, times_ms, marker='o', linewidth=1.5, label=method_name)

    ax.yaxis.grid(True, linestyle='--', linewidth=0.5, alpha=0.7)
    for spine in ['top', 'right']:
        ax.spines[spine].set_visible(False)
    ax.set_xlabel('Window', fontsize=10, labelpad=10)
    ax.set_ylabel('Ranking time (ms)', fontsize=10, labelpad=10)
    ax.set_title('Ranking time per window', fontsize=14, pad=20, fontweight='bold')
    ax.legend(loc="upper right", framealpha=1, facecolor='white')

    plt.tight_layout()
    return save_or_show("ranking times", save_info)
