#!/usr/bin/env python3
"""
Utility script to run the feedforward examples easily.

Usage:
    python scripts/run_example.py xor
    python scripts/run_example.py or --seed 3 --visualize
"""

import sys
import argparse
from pathlib import Path

import numpy as np

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from feedforward import Config
from examples.train_logic import train


EXAMPLES = {
    'xor': {
        'config': 'examples/configs/config_xor.ini',
        'description': 'XOR logic problem (one hidden layer)'
    },
    'or': {
        'config': 'examples/configs/config_or.ini',
        'description': 'OR logic problem (single neuron)'
    },
}


def main():
    parser = argparse.ArgumentParser(description='Run feedforward examples')
    parser.add_argument('example', choices=EXAMPLES.keys(),
                        help='Example to run')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for weight initialization and shuffling')
    parser.add_argument('--num-jobs', type=int, default=None,
                        help='Number of threads per layer (overrides the config file)')
    parser.add_argument('--visualize', action='store_true',
                        help='Render the trained network with Graphviz')

    args = parser.parse_args()

    example = EXAMPLES[args.example]
    print(f"Running {example['description']}...")

    if args.seed is not None:
        np.random.seed(args.seed)

    config = Config(example['config'])
    if args.num_jobs is not None:
        config.num_jobs = args.num_jobs

    trainer = train(args.example, config, visualize=args.visualize)
    print(f"\nEpochs: {len(trainer.history)}, final mse: {trainer.history[-1]:.6f}")


if __name__ == '__main__':
    main()
