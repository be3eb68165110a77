def print_recommendations(recommendations):
    """Prints recommendations, most urgent first."""
    if not recommendations:
        print("\nNo recommendations. Soil conditions appear normal.")
        return

    # Sort by priority for display (critical -> low); the analysis keeps rule order
    priority_order = {"critical": 0, "high": 1, "medium": 2, "low": 3}
    sorted_recs = sorted(recommendations, key=lambda r: priority_order.get(r.priority, 99))

    print("\n--- RECOMMENDATIONS ---")
    for rec in sorted_recs:
        print(f"[{rec.priority.upper()}] {rec.type}: {rec.message}")
        print(f"    Action:   {rec.action}")
        print(f"    Timeline: {rec.timeline} | Cost: {rec.cost}")
        print(f"    Season:   {rec.seasonal_advice}")


def generate_report(result, summary=None):
    """Prints a soil analysis result to the console."""
    print("\n=== SOIL ANALYSIS REPORT ===")

    if summary:
        print("--- Data Sources ---")
        print(f"Scenes:        {summary.get('total_scenes', 0)}")
        print(f"Avg Cloud:     {summary.get('average_cloud_cover', 0):.1f}%")
        if summary.get("data_source"):
            print(f"Source:        {summary['data_source']}")
        if summary.get("area_of_interest"):
            min_lon, min_lat, max_lon, max_lat = summary["area_of_interest"]
            print(f"Area:          {min_lat:.4f}, {min_lon:.4f} to {max_lat:.4f}, {max_lon:.4f}")
        meta = summary.get("scene_metadata")
        if meta:
            print(f"Satellite:     {meta.get('satellite', 'n/a')} {meta.get('sensor', '')} "
                  f"({meta.get('processing_level', 'n/a')})")
        print("--------------------")

    print(f"Scene Used:    {result.scene_used}")
    print(f"Confidence:    {result.confidence.upper()}")

    idx = result.indices
    print("\n--- SPECTRAL INDICES ---")
    print(f"NDVI: {idx.ndvi:+.3f} | EVI: {idx.evi:+.3f} | SAVI: {idx.savi:+.3f}")
    print(f"NDMI: {idx.ndmi:+.3f} | BSI: {idx.bsi:+.3f}")

    m = result.moisture
    print("\n--- MOISTURE ---")
    print(f"{m.percentage:.1f}% ({m.level}) - {m.description}")

    c = result.composition
    print("\n--- COMPOSITION ---")
    print(f"Soil Type: {c.soil_type} - {c.description}")
    print(f"{'Clay':<16} {c.clay:>6.1f}%")
    print(f"{'Sand':<16} {c.sand:>6.1f}%")
    print(f"{'Silt':<16} {c.silt:>6.1f}%")
    print(f"{'Organic Matter':<16} {c.organic_matter:>6.1f}%")
    print(f"{'Iron Oxide':<16} {c.iron_oxide:>6.1f}%")
    print(f"{'pH':<16} {c.ph:>6.1f}")
    print(f"Fertility: {c.fertility.score}/100 ({c.fertility.level}) - {c.fertility.description}")

    t = result.temperature
    print("\n--- TEMPERATURE ---")
    print(f"{t.celsius:.1f}°C / {t.fahrenheit:.1f}°F - {t.description}")
    print(f"Factors: seasonal {t.factors.seasonal:+.1f}, latitude {t.factors.latitude:+.1f}, "
          f"surface {t.factors.surface:+.1f}")

    print_recommendations(result.recommendations)
    print("============================\n")
