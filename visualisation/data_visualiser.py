from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from matplotlib.ticker import FuncFormatter

from counters.multiset import Multiset


def save_or_show(title: str, save_info) -> Optional[Path]:
    """
    Save the current figure under save_info = (directory, format), or show it
    when directory is None. Returns the written path, if any.
    """
    directory, file_format = save_info
    if directory is None:
        plt.show()
        return None

    if file_format.lower() not in ("pdf", "png"):
        raise ValueError("File format must be either 'pdf' or 'png'")

    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)

    stem = title.lower().replace("window", "w").replace(": ", "_").replace(" ", "_")[:24]
    filename = path / f"{stem}.{file_format.lower()}"
    plt.savefig(filename, format=file_format.lower())
    plt.close()
    return filename


def plot_frequency_distribution(
    freq_dist: Multiset,
    n: int,
    save_info,
    title: str = "Frequency Distribution of Keys",
    max_keys: int = 100,
    verbose: bool = False
) -> Optional[Path]:
    """
    Bar chart of the most common keys of `freq_dist`; keys above the 1/n
    share of the total are highlighted as heavy hitters.
    """
    global_total = float(freq_dist.total())
    ranked = freq_dist.k_most_common_ordered(max_keys)
    if not ranked or global_total <= 0:
        raise ValueError("cannot plot an empty distribution")
    pruned = len(freq_dist) > max_keys

    keys, freqs = zip(*ranked)
    freqs = [float(f) for f in freqs]
    threshold_value = global_total / n
    colors = ['#e74c3c' if f > threshold_value else '#95a5a6' for f in freqs]

    plt.figure(figsize=(14, 7), facecolor='white')
    ax = plt.gca()
    ax.set_facecolor('#f5f6f7')
    ax.bar(range(len(freqs)), freqs, color=colors, width=0.6,
           edgecolor=colors, linewidth=0.5, alpha=0.9)
    ax.yaxis.grid(True, linestyle='--', linewidth=0.5, alpha=0.7)

    y_lim_top = int((max(freqs) * 1.15) // 10 + 1) * 10
    ax.set_ylim(0, y_lim_top)

    ax.set_ylabel('Frequency (count)', fontsize=10, labelpad=10)
    ax.set_xlabel('Keys (sorted by frequency)', fontsize=10, labelpad=10)
    title_extra = " (showing only top keys)" if pruned else ""
    ax.set_title(title + title_extra, fontsize=14, pad=20, fontweight='bold')
    plt.xticks(range(len(keys)), [str(k) for k in keys], rotation=90, fontsize=8, ha='center')
    ax.yaxis.set_major_formatter(FuncFormatter(lambda y, _: f'{int(y):,}'))

    for spine in ['top', 'right']:
        ax.spines[spine].set_visible(False)

    hh_patch = mpatches.Patch(color='#e74c3c', label=f'Heavy Hitters (freq > 1/{n} ≈ {int(threshold_value):,})')
    other_patch = mpatches.Patch(color='#95a5a6', label='Other Keys')
    ax.legend(handles=[hh_patch, other_patch], loc="upper right", framealpha=1, facecolor='white')

    if 0 < threshold_value <= y_lim_top:
        ax.axhline(y=threshold_value, color='#e74c3c', linestyle='--', linewidth=1, alpha=0.7)

    plt.tight_layout()
    filename = save_or_show(title, save_info)
    if verbose and filename is not None:
        print(f"Plot saved to: {filename}")
    return filename
