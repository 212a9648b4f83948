from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

import PIL.Image

EXAMPLES_ROOT = Path("examples/cli-options")
GRADIENT_ARGS = ["--colors", "0,7,100", "32,107,203", "237,255,255", "255,170,0", "0,2,0",
                 "--positions", "0", "40", "80", "120", "160"]
BASE_ARGS = ["generate", "--dimensions", "160", "120", "--center", "-0.5", "0", "--zoom", "50", *GRADIENT_ARGS]


@dataclass
class Expected:
    path: Path
    size: tuple[int, int] | None = None


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]
    clean: list[Path] | None = None

    def full_args(self) -> list[str]:
        return [sys.executable, "fractal.py", *self.args]


EXAMPLES: list[Example] = [
    Example(
        name="defaults",
        args=["generate", "--dimensions", "160", "120", "--center", "0", "0",
              "--outfile", str(EXAMPLES_ROOT / "defaults" / "white.png")],
        expected=[Expected(EXAMPLES_ROOT / "defaults" / "white.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "defaults"],
    ),
    Example(
        name="colors",
        args=[*BASE_ARGS, "--outfile", str(EXAMPLES_ROOT / "colors" / "ultra.png")],
        expected=[Expected(EXAMPLES_ROOT / "colors" / "ultra.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "colors"],
    ),
    Example(
        name="zoom",
        args=["generate", "--dimensions", "160", "120", "--center", "-0.745", "0.11", "--zoom", "4000",
              *GRADIENT_ARGS, "--outfile", str(EXAMPLES_ROOT / "zoom" / "seahorse.png")],
        expected=[Expected(EXAMPLES_ROOT / "zoom" / "seahorse.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "zoom"],
    ),
    Example(
        name="limit",
        args=[*BASE_ARGS, "--limit", "1000", "--outfile", str(EXAMPLES_ROOT / "limit" / "deep.png")],
        expected=[Expected(EXAMPLES_ROOT / "limit" / "deep.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "limit"],
    ),
    Example(
        name="julia",
        args=["generate", "--dimensions", "160", "120", "--center", "0", "0", "--zoom", "40",
              "--julia", "-0.8", "0.156", *GRADIENT_ARGS,
              "--outfile", str(EXAMPLES_ROOT / "julia" / "dendrite.png")],
        expected=[Expected(EXAMPLES_ROOT / "julia" / "dendrite.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "julia"],
    ),
    Example(
        name="background",
        args=[*BASE_ARGS, "--background", "0,0,0", "--outfile", str(EXAMPLES_ROOT / "background" / "black-interior.png")],
        expected=[Expected(EXAMPLES_ROOT / "background" / "black-interior.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "background"],
    ),
    Example(
        name="table-size",
        args=[*BASE_ARGS, "--table-size", "256", "--outfile", str(EXAMPLES_ROOT / "table-size" / "coarse.png")],
        expected=[Expected(EXAMPLES_ROOT / "table-size" / "coarse.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "table-size"],
    ),
    Example(
        name="format",
        args=[*BASE_ARGS, "--outfile", str(EXAMPLES_ROOT / "format" / "custom.bmp")],
        expected=[Expected(EXAMPLES_ROOT / "format" / "custom.bmp", (160, 120))],
        clean=[EXAMPLES_ROOT / "format"],
    ),
    Example(
        name="swatch",
        args=["swatch", *GRADIENT_ARGS, "--table-size", "512",
              "--outfile", str(EXAMPLES_ROOT / "swatch" / "gradient.png")],
        expected=[Expected(EXAMPLES_ROOT / "swatch" / "gradient.png", (512, 100))],
        clean=[EXAMPLES_ROOT / "swatch"],
    ),
    Example(
        name="verbose",
        args=[*BASE_ARGS, "--verbose", "--outfile", str(EXAMPLES_ROOT / "verbose" / "diagnostic.png")],
        expected=[Expected(EXAMPLES_ROOT / "verbose" / "diagnostic.png", (160, 120))],
        clean=[EXAMPLES_ROOT / "verbose"],
    ),
]


def _reset(example: Example) -> None:
    """Remove stale outputs of ``example`` and create its output directories."""

    for path in example.clean or []:
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    for expected in example.expected:
        expected.path.parent.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    for expected in example.expected:
        if not expected.path.is_file():
            raise RuntimeError(f"Expected file {expected.path} was not created")
        if expected.size is not None:
            with PIL.Image.open(expected.path) as image:
                if image.size != expected.size:
                    raise RuntimeError(f"{expected.path} is {image.size}, expected {expected.size}")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _reset(example)
        subprocess.run(example.full_args(), check=True)
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
