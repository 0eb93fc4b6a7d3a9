"""Consistent visual style for all project figures.

Sets seaborn whitegrid theme with a colorblind-safe palette and provides
save_figure() for dual PNG/SVG output.
"""

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for headless rendering

import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path

# Colorblind-safe palette (seaborn 'colorblind' preset), one colour per policy
PALETTE = sns.color_palette("colorblind", n_colors=8)
FULL_DISPERSION_COLOR = (0.5, 0.5, 0.5)  # gray


def apply_style() -> None:
    """Apply project-wide matplotlib/seaborn style. Idempotent."""
    sns.set_theme(style="whitegrid")
    plt.rcParams.update({
        "figure.dpi": 150,
        "savefig.dpi": 300,
        "font.size": 10,
        "axes.titlesize": 12,
        "axes.labelsize": 11,
        "legend.fontsize": 9,
        "figure.figsize": (8, 5),
        "svg.fonttype": "none",
    })


def save_figure(fig: plt.Figure, output_dir: Path, name: str) -> tuple[Path, Path]:
    """Save figure as both PNG (300 dpi) and SVG, then close it.

    Returns:
        Tuple of (png_path, svg_path).
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    png_path = output_dir / f"{name}.png"
    svg_path = output_dir / f"{name}.svg"
    fig.savefig(png_path, dpi=300, bbox_inches="tight")
    fig.savefig(svg_path, bbox_inches="tight")
    plt.close(fig)
    return png_path, svg_path
