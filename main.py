import time
import argparse
import logging
import os
import sys

# -- Reading modules ---
from reader.reader import MIPInstance
# --- Pre-solver modules ---
from presolve.engine import PresolveEngine, DEFAULT_MAX_ROUNDS
from presolve.coeff_strengthening import CoefficientStrengthening
from utils.logger_config import setup_logger

logger = logging.getLogger(__name__)


# --- Pre-Solver function ---
def run_presolve(instance: MIPInstance, max_rounds: int = DEFAULT_MAX_ROUNDS, validate: bool = False):
    """
    Runs coefficient strengthening on the given instance,
    modifying it in place
    """
    data = instance.to_presolve_data()
    engine = PresolveEngine(data, max_rounds=max_rounds, validate=validate)
    engine.register(CoefficientStrengthening())
    engine.run()
    instance.load_presolve_data(data)
    return engine


def summarize_reductions(counter):
    """
    Prints a summary of reductions applied
    """
    print("\nReduction Summary:")
    print(f"{'Reduction Type':<25} | Count")
    print("-" * 40)
    for kind, count in counter.items():
        print(f"{kind:<25} | {count}")
    print("-" * 40)

def print_summary_comparison(stats_before, stats_after):
    """ Prints a before-and-after table of model statistics"""
    print("\n📊 Model Statistics Comparison:")
    print(f"{'':<20} | {'Original':>12} | {'Presolved':>12}")
    print("-" * 50)
    print(f"{'Constraints':<20} | {stats_before['cons']:>12} | {stats_after['cons']:>12}")
    print(f"{'Nonzeros':<20} | {stats_before['nnz']:>12} | {stats_after['nnz']:>12}")
    print(f"{'Total Variables':<20} | {stats_before['vars']:>12} | {stats_after['vars']:>12}")
    print(f"{'  - Binary':<20} | {stats_before['bin_vars']:>12} | {stats_after['bin_vars']:>12}")
    print(f"{'  - Integer':<20} | {stats_before['int_vars']:>12} | {stats_after['int_vars']:>12}")
    print(f"{'  - Continuous':<20} | {stats_before['cont_vars']:>12} | {stats_after['cont_vars']:>12}")
    print("-" * 50)

def get_stats(instance: MIPInstance) -> dict:
    """
    Extracts key statistics from an MIPInstance object
    """
    return {
        "cons": instance.num_constraints,
        "nnz": instance.num_nonzeros,
        "vars": instance.num_vars,
        "bin_vars": instance.num_binary,
        "int_vars": instance.num_integer,
        "cont_vars": instance.num_continuous
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Coefficient strengthening presolve for MIP instances.")
    parser.add_argument("instance", type=str, help="Path to an .mps or .lp instance.")
    parser.add_argument("--max-rounds", type=int, default=DEFAULT_MAX_ROUNDS,
                        help="Maximum number of presolve rounds.")
    parser.add_argument("--validate", action="store_true",
                        help="Check presolve state consistency after every presolver.")
    parser.add_argument("--output", type=str, default=None,
                        help="Write the strengthened model to this path.")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


# --- Main execution block ---

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(args.log_level)

    print(f"📦 Loading instance: {args.instance}")
    if not os.path.exists(args.instance):
        print(f"❌ ERROR: File not found at '{args.instance}'")
        return 1
    instance = MIPInstance(args.instance)
    instance.pretty_print()
    stats_before = get_stats(instance)

    print("⚙️  Starting pre-solver...")
    start_pre_solver_time = time.time()
    engine = run_presolve(instance, max_rounds=args.max_rounds, validate=args.validate)
    total_pre_solver_time = time.time() - start_pre_solver_time
    stats_after = get_stats(instance)
    print(f"Pre-solve complete in {total_pre_solver_time:.2f} seconds ({engine.rounds} rounds)")
    print_summary_comparison(stats_before, stats_after)
    summarize_reductions(engine.summary())

    if args.output:
        instance.write_model(args.output)
        print(f"Strengthened model written to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
