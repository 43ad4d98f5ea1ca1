"""Command-line front end: train a vocabulary, then encode and decode with it."""

import argparse
import logging
import sys
from pathlib import Path

from .errors import BytePairError
from .factory import from_pretrained, get_tokenizer, list_presets
from .serialise import MODEL_SUFFIX

DEFAULT_VOCAB_SIZE = 2356

log = logging.getLogger(__name__)


def _train(args: argparse.Namespace) -> int:
    model_path = Path(args.model).with_suffix(MODEL_SUFFIX)
    # an existing model is reused unless retraining is forced
    if model_path.exists() and not args.force:
        print(f"model {model_path} exists, skipping training (use --force to retrain)")
        return 0

    text = Path(args.corpus).read_text(encoding="utf-8")
    log.info(f"training on {args.corpus} ({len(text):,} chars)")

    tok = get_tokenizer(args.preset)
    tok.train(text, args.vocab_size, verbose=args.verbose)
    saved = tok.save(args.model)

    print(f"final vocabulary size: {tok.vocab_size()}")
    print(f"saved model to {saved}")
    return 0


def _encode(args: argparse.Namespace) -> int:
    tok = from_pretrained(args.model)
    tokens = tok.encode(args.text)

    if args.show:
        for t, rendered in tok.describe(tokens):
            print(f"{t} ---> {rendered}")
    print(" ".join(str(t) for t in tokens))
    return 0


def _decode(args: argparse.Namespace) -> int:
    tok = from_pretrained(args.model)
    print(tok.decode(args.tokens))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bytepair", description="Byte-pair-encoding vocabulary builder and tokenizer."
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    train_p = sub.add_parser("train", help="Learn a vocabulary from a UTF-8 corpus file.")
    train_p.add_argument("corpus", help="Path to the training corpus.")
    train_p.add_argument("--model", required=True, help="Output path prefix for .model/.vocab.")
    train_p.add_argument(
        "--vocab-size",
        type=int,
        default=DEFAULT_VOCAB_SIZE,
        help=f"Target vocabulary size including the 256 base bytes (default: {DEFAULT_VOCAB_SIZE}).",
    )
    train_p.add_argument("--preset", default="word", choices=list_presets())
    train_p.add_argument("--force", action="store_true", help="Retrain even if the model exists.")
    train_p.add_argument("--verbose", action="store_true", help="Log every learned merge.")
    train_p.set_defaults(func=_train)

    encode_p = sub.add_parser("encode", help="Encode text into token ids.")
    encode_p.add_argument("text", help="Text to encode.")
    encode_p.add_argument("--model", required=True, help="Path to the .model file.")
    encode_p.add_argument("--show", action="store_true", help="Print each token with its text.")
    encode_p.set_defaults(func=_encode)

    decode_p = sub.add_parser("decode", help="Decode token ids into text.")
    decode_p.add_argument("tokens", nargs="*", type=int, help="Token ids.")
    decode_p.add_argument("--model", required=True, help="Path to the .model file.")
    decode_p.set_defaults(func=_decode)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        return args.func(args)
    except (BytePairError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
