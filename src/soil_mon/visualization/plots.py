import matplotlib.pyplot as plt
import numpy as np

# Moisture level bands drawn behind the gauge: (upper bound, colour, label)
MOISTURE_BANDS = [
    (15, "#d73027", "Very low"),
    (30, "#fc8d59", "Low"),
    (60, "#fee08b", "Moderate"),
    (80, "#91cf60", "High"),
    (100, "#1a9850", "Very high"),
]


def plot_analysis_summary(result, title=None, figsize=(14, 5), save_path=None):
    """
    Plots a three-panel summary of a soil analysis.

    Panels: spectral indices (bar), soil texture fractions (bar) and the
    moisture estimate against the level bands.

    Args:
        result: SoilAnalysisResult from analyze_soil().
        title: Figure title. Defaults to the scene identifier.
        figsize: Figure size tuple (width, height).
        save_path: Optional path to save the figure.

    Returns:
        The matplotlib Figure object.
    """
    fig, (ax_idx, ax_comp, ax_moist) = plt.subplots(1, 3, figsize=figsize)
    fig.suptitle(title or f"Soil Analysis - {result.scene_used}", fontsize=14)

    # --- Panel 1: Indices ---
    names = ["NDVI", "EVI", "NDMI", "BSI", "SAVI"]
    values = np.array(result.indices, dtype=float)
    colors = ["#1a9850" if v >= 0 else "#d73027" for v in values]
    ax_idx.bar(names, values, color=colors)
    ax_idx.axhline(0, color="black", linewidth=0.8)
    ax_idx.set_ylim(-1, 1)
    ax_idx.set_title("Spectral Indices")
    ax_idx.grid(True, axis="y", alpha=0.3)

    # --- Panel 2: Composition ---
    comp = result.composition
    labels = ["Clay", "Sand", "Silt", "Org. Matter", "Iron Oxide"]
    fractions = [comp.clay, comp.sand, comp.silt, comp.organic_matter, comp.iron_oxide]
    ax_comp.bar(labels, fractions, color=["#8c510a", "#dfc27d", "#bf812d", "#35978f", "#b2182b"])
    ax_comp.set_ylim(0, 100)
    ax_comp.set_ylabel("%")
    ax_comp.set_title(f"{comp.soil_type} | pH {comp.ph:.1f} | Fertility {comp.fertility.score}")
    ax_comp.tick_params(axis="x", rotation=30)
    ax_comp.grid(True, axis="y", alpha=0.3)

    # --- Panel 3: Moisture ---
    lower = 0
    for upper, color, label in MOISTURE_BANDS:
        ax_moist.axhspan(lower, upper, color=color, alpha=0.35, label=label)
        lower = upper
    ax_moist.bar(["Moisture"], [result.moisture.percentage], color="#2166ac", width=0.4)
    ax_moist.set_ylim(0, 100)
    ax_moist.set_ylabel("%")
    ax_moist.set_title(f"Moisture {result.moisture.percentage:.1f}% ({result.moisture.level})")
    ax_moist.legend(loc="upper right", fontsize=8)

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
        print(f"Saved analysis summary to {save_path}")

    return fig
