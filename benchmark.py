import numpy as np
from suffix_tree_package import Alphabet, SuffixTreeBuilder
import time
from typing import List, Tuple
import pandas as pd
import matplotlib.pyplot as plt

def generate_random_strings(n: int, length: int, symbols: str) -> List[str]:
    """Generate n random strings of given length over the given symbols"""
    return [''.join(np.random.choice(list(symbols), length)) for _ in range(n)]

def run_benchmark(n_strings: int, string_length: int, symbols: str) -> Tuple[float, int]:
    """Build a tree for every string and return total build time and total node count"""
    alphabet = Alphabet(symbols)
    strings = generate_random_strings(n_strings, string_length, symbols)

    total_nodes = 0
    start_time = time.time()
    for s in strings:
        tree = SuffixTreeBuilder(alphabet=alphabet).build(s)
        total_nodes += tree.node_count
    build_time = time.time() - start_time

    return build_time, total_nodes

def main():
    # Test parameters
    string_lengths = [100, 1_000, 10_000]  # Different string lengths
    n_strings = 20  # Strings per configuration
    alphabets = {'binary': 'ab', 'dna': 'acgt', 'lowercase': 'abcdefghijklmnopqrstuvwxyz'}

    # Results storage
    results = []

    try:
        for alphabet_name, symbols in alphabets.items():
            for string_length in string_lengths:
                print(f"Testing: {n_strings} strings of length {string_length} over {alphabet_name}")
                build_time, total_nodes = run_benchmark(n_strings, string_length, symbols)

                results.append({
                    'alphabet': alphabet_name,
                    'string_length': string_length,
                    'n_strings': n_strings,
                    'build_time': build_time,
                    'symbols_per_second': n_strings * string_length / build_time,
                    'nodes_per_symbol': total_nodes / (n_strings * string_length)
                })

        # Convert to DataFrame and save results
        df = pd.DataFrame(results)
        df.to_csv('benchmark_results.csv', index=False)

        # Print summary statistics
        print("\nBenchmark Summary:")
        print("=================")
        for alphabet_name in alphabets:
            data = df[df['alphabet'] == alphabet_name]
            print(f"\nAlphabet: {alphabet_name}")
            print(f"Max throughput: {data['symbols_per_second'].max():.0f} symbols/second")
            print(f"Nodes per symbol: {data['nodes_per_symbol'].mean():.2f}")

        # Create visualization
        plt.figure(figsize=(12, 6))

        # Plot throughput; a flat line means linear-time construction
        plt.subplot(1, 2, 1)
        for alphabet_name in alphabets:
            data = df[df['alphabet'] == alphabet_name]
            plt.plot(data['string_length'], data['symbols_per_second'],
                    marker='o', label=alphabet_name)

        plt.xscale('log')
        plt.xlabel('String Length')
        plt.ylabel('Symbols per Second')
        plt.title('Throughput vs String Length')
        plt.grid(True, alpha=0.3)
        plt.legend()

        # Plot tree size
        plt.subplot(1, 2, 2)
        for alphabet_name in alphabets:
            data = df[df['alphabet'] == alphabet_name]
            plt.plot(data['string_length'], data['nodes_per_symbol'],
                    marker='o', label=alphabet_name)

        plt.xscale('log')
        plt.xlabel('String Length')
        plt.ylabel('Nodes per Symbol')
        plt.title('Tree Size vs String Length')
        plt.grid(True, alpha=0.3)
        plt.legend()

        plt.tight_layout()
        plt.savefig('benchmark_results.png', dpi=300, bbox_inches='tight')
        plt.close()

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user.")

if __name__ == '__main__':
    main()
