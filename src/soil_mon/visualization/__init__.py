from .reports import generate_report, print_recommendations
from .plots import plot_analysis_summary
