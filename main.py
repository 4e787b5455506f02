import argparse
import os

from data.generate_data import prepare_windows
from evaluation import evaluate_method
from runners.bounded_topk_runner import BoundedTopKRunner
from runners.full_sort_runner import FullSortRunner
from utils.io import save_jsonl_gz

# === Experiment Parameters ===
SEED = 42

window_size = 10_000
num_keys = 1_000
n = 100
m = 10
skewed_fraction = 0.8
verbose = True

output_dir = "generated"
results_file = os.path.join(output_dir, "eval_ranking.jsonl.gz")

plot_distr = False
plot_est = False
plot_data_config = ('./plots/data', 'png')
plot_result_config = ('./plots', 'png')

# === Scenario Definition ===

scenario = [
    {'type': 'uniform', 'duration': 2, 'params': {}, 'n': n},
    {'type': 'normal', 'duration': 2, 'params': {}, 'n': n},
    {'type': 'flattened', 'duration': 2, 'params': {'n': n, 'num_hh': 5, 'seed': SEED}, 'n': n},
    {'type': 'tied', 'duration': 2, 'params': {'levels': 4, 'seed': SEED}, 'n': n},
    {'type': 'zipfian', 'duration': 2, 'params': {'s': 1.5}, 'n': n},
]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Compare full-sort and bounded top-k ranking over windowed streams.")
    parser.add_argument("--seed", type=int, default=SEED)
    parser.add_argument("--window-size", type=int, default=window_size)
    parser.add_argument("--num-keys", type=int, default=num_keys)
    parser.add_argument("-n", type=int, default=n, help="number of top keys to rank")
    parser.add_argument("-m", type=int, default=m, help="number of partitions")
    parser.add_argument("--results", default=results_file)
    parser.add_argument("--plot", action="store_true", default=plot_est)
    parser.add_argument("--quiet", action="store_true", default=not verbose)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    steps = [dict(step, n=args.n) for step in scenario]

    # === Step 1: Generate windows + ground truth ===
    windows = prepare_windows(args.seed, args.window_size, args.num_keys, args.m, steps,
                              skewed_fraction, plot_distr, plot_data_config)

    # === Step 2: Evaluate both ranking strategies ===
    results_by_method = {}
    for method_name, runner in (
        ("full_sort", FullSortRunner(m=args.m, n=args.n, verbose=not args.quiet)),
        ("bounded_topk", BoundedTopKRunner(m=args.m, n=args.n, verbose=not args.quiet)),
    ):
        if not args.quiet:
            print(runner)
        results_by_method[method_name] = evaluate_method(
            method_name=method_name,
            runner=runner,
            windows=windows,
            verbose=not args.quiet,
            plot_est=args.plot,
            save_info=plot_result_config
        )

    if args.plot:
        from visualisation.result_visualiser import plot_ranking_times
        plot_ranking_times(results_by_method, plot_result_config)

    # === Step 3: Save Results ===
    save_jsonl_gz(
        [dict(r, method=name) for name, results in results_by_method.items() for r in results],
        args.results
    )
    if not args.quiet:
        print(f"Evaluation complete. Results saved to: {args.results}")
    return results_by_method


if __name__ == "__main__":
    main()
