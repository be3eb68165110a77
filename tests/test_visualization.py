import matplotlib
matplotlib.use('Agg') # Prevent UI window
import matplotlib.pyplot as plt
from datetime import datetime, timezone

from soil_mon import analyze_soil, Scene, Location
from soil_mon.visualization.plots import plot_analysis_summary
from soil_mon.visualization.reports import generate_report, print_recommendations

NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


def make_result(bands=None):
    bands = bands or {"B02": 0.08, "B04": 0.12, "B08": 0.25, "B11": 0.20, "B12": 0.15}
    scene = Scene(id="S2_test", captured_at=NOW, cloud_cover=8.0, bands=bands)
    return analyze_soil([scene], Location(lat=36.7, lon=-119.8), now=NOW)


def test_plot_analysis_summary(tmp_path):
    result = make_result()
    out = tmp_path / "summary.png"

    fig = plot_analysis_summary(result, save_path=str(out))

    assert isinstance(fig, plt.Figure)
    assert len(fig.axes) == 3
    assert out.exists()
    assert fig.axes[0].get_title() == "Spectral Indices"
    assert "Clay" in fig.axes[1].get_title()
    plt.close(fig)


def test_plot_without_saving(capsys):
    fig = plot_analysis_summary(make_result(), title="Field 7")
    assert fig._suptitle.get_text() == "Field 7"
    assert "Saved" not in capsys.readouterr().out
    plt.close(fig)


def test_generate_report(capsys):
    result = make_result()
    generate_report(result, summary={"total_scenes": 1, "average_cloud_cover": 8.0,
                                     "data_source": "Mock Sentinel-2 Data"})
    out = capsys.readouterr().out

    assert "=== SOIL ANALYSIS REPORT ===" in out
    assert "Scene Used:    S2_test" in out
    assert "Confidence:    MEDIUM" in out
    assert "Source:        Mock Sentinel-2 Data" in out
    assert "Soil Type: Clay" in out
    assert "Optimal Crop Selection" in out


def test_recommendations_printed_most_urgent_first(capsys):
    # NDMI -0.5 and NDVI -0.2: critical irrigation plus lower priority rules
    result = make_result({"B02": 0.08, "B04": 0.15, "B08": 0.10, "B11": 0.30, "B12": 0.25})
    print_recommendations(result.recommendations)
    lines = [l for l in capsys.readouterr().out.splitlines() if l.startswith("[")]

    assert lines[0].startswith("[CRITICAL] Critical Irrigation")


def test_no_recommendations(capsys):
    print_recommendations([])
    assert "No recommendations" in capsys.readouterr().out
