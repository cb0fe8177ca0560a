#!/usr/bin/env python3
"""Train a small network to translate Morse code symbols into characters."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from scratchnet import (
    InverseTimeDecay,
    NeuralNetwork,
    SigmoidActivation,
    SwishActivation,
    TrainerConfig,
    XavierInitialization,
    load_model,
    model_file_name,
    save_model,
)
from scratchnet.data.morse import MAX_CODE_LENGTH, NUM_CLASSES, MorseDataset, decode_output, encode_morse
from scratchnet.training import OnlineTrainer

logger = logging.getLogger("train_morse")

DEFAULT_MESSAGE = "- .... .. ... / .. ... / .- / - . ... -"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--epochs", type=int, default=10_000)
    parser.add_argument("--hidden-size", type=int, default=20)
    parser.add_argument("--lr", type=float, default=0.5)
    parser.add_argument("--decay-rate", type=float, default=1e-4)
    parser.add_argument("--model-dir", type=str, default=".")
    parser.add_argument("--retrain", action="store_true", help="Ignore any saved model")
    parser.add_argument("--message", type=str, default=DEFAULT_MESSAGE, help="Space separated Morse symbols")
    parser.add_argument("--plot", type=str, default=None, help="Save the training curve to this path")
    parser.add_argument("--progress", action="store_true")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser.parse_args()


def build_network(args: argparse.Namespace) -> NeuralNetwork:
    network = NeuralNetwork(args.lr, seed=args.seed)
    network.add_layer(MAX_CODE_LENGTH, SwishActivation(), XavierInitialization())
    network.add_layer(args.hidden_size, SigmoidActivation(), XavierInitialization())
    network.add_layer(NUM_CLASSES, SigmoidActivation(), XavierInitialization())
    return network


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    network = build_network(args)
    model_path = Path(args.model_dir) / model_file_name(network)

    if model_path.exists() and not args.retrain:
        load_model(model_path, network)
    else:
        trainer = OnlineTrainer(
            network,
            decay=InverseTimeDecay(args.lr, args.decay_rate),
            config=TrainerConfig(epochs=args.epochs, log_every=1000, show_progress=args.progress, seed=args.seed),
        )
        history = trainer.fit(MorseDataset())
        logger.info("Final error after %d epochs: %.6f", history.epochs, history.losses[-1])
        save_model(model_path, network)
        if args.plot:
            import matplotlib

            matplotlib.use("Agg")
            from scratchnet.utils.visualization import plot_loss_history

            fig = plot_loss_history(history.losses, history.learning_rates)
            fig.savefig(args.plot)

    decoded = []
    for code in args.message.split():
        char = decode_output(network.predict(encode_morse(code)))
        logger.info("Morse Code: %s -> Predicted: %r", code, char)
        decoded.append(char)
    print(f"Decoded Message: {''.join(decoded)}")


if __name__ == "__main__":
    main()
