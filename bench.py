"""Benchmark bytepair training, encoding and decoding on a public-domain corpus."""

import argparse
import logging
import time

from datasets import load_dataset

import bytepair as bp

# Configure logging to show INFO level and above.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def format_bytes(num_bytes: int) -> str:
    """Format bytes to human-readable string."""
    size = float(num_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} TB"


def benchmark(n_rows: int, vocab_size: int, preset: str) -> None:
    """Train on the first ``n_rows`` rows, then time encode and decode."""
    print("=" * 70)
    print("BYTEPAIR BENCHMARK")
    print("=" * 70)

    print("\nLoading dataset...")
    ds = load_dataset("stevez80/Sci-Fi-Books-gutenberg", split="train")
    text = "".join(ds[:n_rows]["text"])
    text_size = len(text.encode("utf-8"))
    print(f"   Text size: {format_bytes(text_size)} ({len(text):,} chars)")

    tok = bp.get_tokenizer(preset)

    print(f"\nTraining tokenizer (vocab_size={vocab_size}, preset={preset})...")
    start = time.perf_counter()
    tok.train(text, vocab_size=vocab_size)
    train_time = time.perf_counter() - start
    print(f"   Training completed in {train_time:.3f}s")
    print(f"   Final vocab size: {tok.vocab_size():,}")

    print("\nBenchmarking encoding...")
    start = time.perf_counter()
    encoded = tok.encode(text)
    encode_time = time.perf_counter() - start
    print(f"   Encode time: {encode_time * 1000:.2f}ms")
    print(f"   Throughput: {len(text) / encode_time:,.0f} chars/sec")
    print(f"   Tokens generated: {len(encoded):,}")

    print("\nBenchmarking decoding...")
    start = time.perf_counter()
    decoded = tok.decode(encoded)
    decode_time = time.perf_counter() - start
    print(f"   Decode time: {decode_time * 1000:.2f}ms")
    assert decoded == text, "decoded text does not match input"
    print("   Decoding verified: output matches input")

    print("\nCompression Statistics:")
    print(f"   Original tokens (bytes): {text_size:,}")
    print(f"   Compressed tokens: {len(encoded):,}")
    print(f"   Compression ratio: {text_size / len(encoded):.2f}x")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--rows", type=int, default=20, help="Dataset rows to use.")
    parser.add_argument("--vocab-size", type=int, default=2356)
    parser.add_argument("--preset", default="word", choices=bp.list_presets())
    args = parser.parse_args()
    benchmark(args.rows, args.vocab_size, args.preset)


if __name__ == "__main__":
    main()
