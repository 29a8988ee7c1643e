"""Entry point: delegates to CLI app (one module per mode: parse, draft, batch, minimums, serve)."""

from rich.traceback import install

from src.cli import app

if __name__ == "__main__":
    install(show_locals=False, max_frames=5, word_wrap=True)
    app()
