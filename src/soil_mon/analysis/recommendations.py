"""
Rule-based agricultural recommendations.

The rules live in one ordered table, RULES. Every rule is evaluated against
its own guard and every matching rule fires; nothing suppresses anything
else. The returned list follows table order, so the order of RULES is part
of the output contract.
"""

from datetime import date, datetime
from typing import NamedTuple, Callable, Optional, List, Dict, Any

from ..data.scenes import Location
from ..processing.indices import SpectralIndices
from .moisture import MoistureResult
from .composition import CompositionResult

DEFAULT_SEASONAL_ADVICE = "Consult local agricultural extension for timing"

SEASONAL_ADVICE = {
    "irrigation": {
        "spring": "Monitor emerging crops closely for water needs",
        "summer": "Peak irrigation season - ensure adequate water supply",
        "fall": "Reduce irrigation as temperatures cool",
        "winter": "Minimal irrigation needed in most regions",
    },
    "planting": {
        "spring": "Optimal time for most crop planting",
        "summer": "Plant heat-tolerant varieties",
        "fall": "Plant cool-season crops and cover crops",
        "winter": "Limited planting options in temperate regions",
    },
    "soil_amendment": {
        "spring": "Apply amendments before planting",
        "summer": "Light applications to avoid plant stress",
        "fall": "Ideal time for major soil amendments",
        "winter": "Plan and prepare amendments for spring",
    },
    "liming": {
        "spring": "Apply lime before planting season",
        "summer": "Avoid liming during hot weather",
        "fall": "Best time for lime application",
        "winter": "Good time for lime application in mild climates",
    },
}


class Recommendation(NamedTuple):
    type: str
    category: str
    priority: str
    severity: str
    message: str
    action: str
    details: str
    timeline: str
    cost: str
    impact: str
    seasonal_advice: str


class RuleContext(NamedTuple):
    moisture: MoistureResult
    composition: CompositionResult
    indices: SpectralIndices
    location: Location


class Rule(NamedTuple):
    name: str
    applies: Callable[[RuleContext], bool]
    template: Dict[str, str]
    # Key into SEASONAL_ADVICE; None when the template carries fixed advice
    practice: Optional[str] = None
    render_action: Optional[Callable[[RuleContext], str]] = None


def get_season(month_index: int, location: Optional[Location] = None) -> str:
    """
    Season for a zero-based month index (January = 0).

    Northern Hemisphere quarters are used for every location.
    """
    if 2 <= month_index <= 4:
        return "spring"
    if 5 <= month_index <= 7:
        return "summer"
    if 8 <= month_index <= 10:
        return "fall"
    return "winter"


def get_seasonal_advice(practice: str, location: Location, on_date: date) -> str:
    season = get_season(on_date.month - 1, location)
    return SEASONAL_ADVICE.get(practice, {}).get(season, DEFAULT_SEASONAL_ADVICE)


def suggest_crops(ctx: RuleContext) -> List[str]:
    comp = ctx.composition
    moisture = ctx.moisture.percentage
    if comp.clay > 50 and moisture > 60:
        return ["rice", "cotton", "soybeans"]
    elif comp.sand > 60 and moisture < 40:
        return ["drought-resistant crops", "millet", "sorghum"]
    elif 6.0 <= comp.ph <= 7.5:
        return ["corn", "wheat", "vegetables"]
    return []


RULES = (
    # 1. Water management (mutually exclusive moisture bands)
    Rule(
        name="critical_irrigation",
        applies=lambda c: c.moisture.percentage < 15,
        practice="irrigation",
        template={
            "type": "Critical Irrigation",
            "category": "water_management",
            "priority": "critical",
            "severity": "high",
            "message": "Critically low soil moisture detected. Immediate irrigation required to prevent crop stress.",
            "action": "Implement emergency irrigation within 24-48 hours",
            "details": "Install drip irrigation systems for efficient water use. Consider mulching to retain moisture.",
            "timeline": "Immediate (0-2 days)",
            "cost": "Medium",
            "impact": "High - Prevents crop failure",
        },
    ),
    Rule(
        name="irrigation_management",
        applies=lambda c: 15 <= c.moisture.percentage < 30,
        practice="irrigation",
        template={
            "type": "Irrigation Management",
            "category": "water_management",
            "priority": "high",
            "severity": "medium",
            "message": "Soil moisture is below optimal levels. Regular irrigation recommended.",
            "action": "Increase irrigation frequency by 30-50%",
            "details": "Monitor soil moisture daily. Consider installing moisture sensors for precise irrigation timing.",
            "timeline": "Short-term (1-2 weeks)",
            "cost": "Low",
            "impact": "Medium - Improves crop yield",
        },
    ),
    Rule(
        name="drainage_management",
        applies=lambda c: c.moisture.percentage > 85,
        practice="drainage",
        template={
            "type": "Drainage Management",
            "category": "water_management",
            "priority": "high",
            "severity": "medium",
            "message": "Excessive soil moisture may lead to waterlogging and root rot.",
            "action": "Improve drainage systems and reduce irrigation",
            "details": "Install subsurface drainage tiles. Create raised beds for better drainage. "
                       "Check for irrigation system leaks.",
            "timeline": "Medium-term (2-4 weeks)",
            "cost": "High",
            "impact": "High - Prevents root diseases",
        },
    ),
    # 2. Vegetation cover
    Rule(
        name="urgent_revegetation",
        applies=lambda c: c.indices.ndvi < 0.1,
        practice="planting",
        template={
            "type": "Urgent Revegetation",
            "category": "vegetation",
            "priority": "critical",
            "severity": "high",
            "message": "Extremely poor vegetation cover. Risk of soil erosion and degradation.",
            "action": "Implement immediate soil stabilization and planting program",
            "details": "Use erosion control blankets, plant fast-growing cover crops, apply organic mulch.",
            "timeline": "Immediate (0-1 week)",
            "cost": "High",
            "impact": "Critical - Prevents soil loss",
        },
    ),
    Rule(
        name="vegetation_enhancement",
        applies=lambda c: 0.1 <= c.indices.ndvi < 0.3,
        practice="planting",
        template={
            "type": "Vegetation Enhancement",
            "category": "vegetation",
            "priority": "high",
            "severity": "medium",
            "message": "Low vegetation density detected. Consider crop rotation or replanting.",
            "action": "Plant cover crops or implement crop diversification",
            "details": "Select drought-resistant varieties. Consider nitrogen-fixing legumes for soil improvement.",
            "timeline": "Short-term (2-4 weeks)",
            "cost": "Medium",
            "impact": "Medium - Improves soil health",
        },
    ),
    # 3. Soil structure and fertility
    Rule(
        name="soil_structure_improvement",
        applies=lambda c: c.composition.clay > 60,
        practice="soil_amendment",
        template={
            "type": "Soil Structure Improvement",
            "category": "soil_health",
            "priority": "medium",
            "severity": "low",
            "message": "High clay content restricts water infiltration and root development.",
            "action": "Add organic amendments to improve soil structure",
            "details": "Apply 2-4 inches of compost annually. Use gypsum to improve clay aggregation. "
                       "Avoid working wet clay soil.",
            "timeline": "Long-term (6-12 months)",
            "cost": "Medium",
            "impact": "Medium - Improves soil workability",
        },
    ),
    Rule(
        name="water_retention_enhancement",
        applies=lambda c: c.composition.sand > 70,
        practice="soil_amendment",
        template={
            "type": "Water Retention Enhancement",
            "category": "soil_health",
            "priority": "medium",
            "severity": "medium",
            "message": "Sandy soil has poor water and nutrient retention capacity.",
            "action": "Increase organic matter content and implement frequent, light irrigation",
            "details": "Add compost, biochar, or well-aged manure. Use slow-release fertilizers. "
                       "Consider polymer soil conditioners.",
            "timeline": "Medium-term (3-6 months)",
            "cost": "Medium",
            "impact": "High - Improves nutrient retention",
        },
    ),
    Rule(
        name="organic_matter_enhancement",
        applies=lambda c: c.composition.organic_matter < 2,
        practice="organic_matter",
        template={
            "type": "Organic Matter Enhancement",
            "category": "fertility",
            "priority": "high",
            "severity": "medium",
            "message": "Low organic matter reduces soil fertility and water retention.",
            "action": "Implement comprehensive organic matter building program",
            "details": "Apply 25-50 lbs compost per 1000 sq ft. Plant cover crops. Use crop residue management. "
                       "Consider vermicomposting.",
            "timeline": "Long-term (12-24 months)",
            "cost": "Medium",
            "impact": "High - Transforms soil health",
        },
    ),
    # 4. pH management (mutually exclusive pH bands)
    Rule(
        name="severe_acidity_correction",
        applies=lambda c: c.composition.ph < 5.5,
        practice="liming",
        template={
            "type": "Severe Acidity Correction",
            "category": "ph_management",
            "priority": "high",
            "severity": "high",
            "message": "Severely acidic soil limits nutrient availability and microbial activity.",
            "action": "Apply agricultural lime with ongoing pH monitoring",
            "details": "Apply 2-4 tons/acre of ground limestone. Test pH every 6 months. "
                       "Consider pelletized lime for easier application.",
            "timeline": "Medium-term (6-12 months)",
            "cost": "Medium",
            "impact": "High - Unlocks soil nutrients",
        },
    ),
    Rule(
        name="mild_acidity_adjustment",
        applies=lambda c: 5.5 <= c.composition.ph < 6.2,
        practice="liming",
        template={
            "type": "Mild Acidity Adjustment",
            "category": "ph_management",
            "priority": "medium",
            "severity": "low",
            "message": "Slightly acidic soil may benefit from pH adjustment for optimal crop growth.",
            "action": "Apply moderate lime application",
            "details": "Apply 1-2 tons/acre of agricultural lime. Monitor pH annually. "
                       "Consider organic amendments like wood ash.",
            "timeline": "Medium-term (6-12 months)",
            "cost": "Low",
            "impact": "Medium - Optimizes nutrient uptake",
        },
    ),
    Rule(
        name="alkalinity_reduction",
        applies=lambda c: c.composition.ph > 8.5,
        practice="acidification",
        template={
            "type": "Alkalinity Reduction",
            "category": "ph_management",
            "priority": "high",
            "severity": "high",
            "message": "Highly alkaline soil restricts iron and zinc availability.",
            "action": "Apply sulfur amendments and organic acidifiers",
            "details": "Apply 10-20 lbs/1000 sq ft elemental sulfur. Use organic mulches. "
                       "Consider iron sulfate for quick results.",
            "timeline": "Long-term (12-18 months)",
            "cost": "Medium",
            "impact": "High - Prevents micronutrient deficiency",
        },
    ),
    # 5. Precision agriculture: good cover but stressed canopy
    Rule(
        name="water_stress_management",
        applies=lambda c: c.indices.ndvi > 0.7 and c.indices.ndmi < 0.3,
        practice="precision_irrigation",
        template={
            "type": "Water Stress Management",
            "category": "precision_agriculture",
            "priority": "medium",
            "severity": "medium",
            "message": "Good vegetation cover but moisture stress detected in plants.",
            "action": "Implement precision irrigation targeting plant water needs",
            "details": "Use NDMI monitoring for irrigation scheduling. Consider deficit irrigation strategies "
                       "during non-critical growth stages.",
            "timeline": "Short-term (1-2 weeks)",
            "cost": "Low",
            "impact": "Medium - Optimizes water use efficiency",
        },
    ),
    # 6. Soil biology and erosion
    Rule(
        name="soil_biology_enhancement",
        applies=lambda c: c.composition.organic_matter < 3 and c.indices.ndvi < 0.5,
        practice="soil_biology",
        template={
            "type": "Soil Biology Enhancement",
            "category": "soil_health",
            "priority": "medium",
            "severity": "medium",
            "message": "Poor soil biology indicated by low organic matter and vegetation health.",
            "action": "Implement biological soil enhancement program",
            "details": "Apply mycorrhizal inoculants, beneficial bacteria, and compost tea. "
                       "Minimize soil disturbance.",
            "timeline": "Medium-term (3-6 months)",
            "cost": "Medium",
            "impact": "High - Builds soil ecosystem",
        },
    ),
    Rule(
        name="erosion_prevention",
        applies=lambda c: c.composition.sand > 60 and c.indices.ndvi < 0.4,
        practice="erosion_control",
        template={
            "type": "Erosion Prevention",
            "category": "conservation",
            "priority": "high",
            "severity": "high",
            "message": "Sandy soil with poor vegetation cover is susceptible to erosion.",
            "action": "Implement immediate erosion control measures",
            "details": "Install windbreaks, create contour farming, use cover crops, apply erosion control matting.",
            "timeline": "Immediate (0-2 weeks)",
            "cost": "Medium",
            "impact": "Critical - Prevents soil loss",
        },
    ),
    # 7. Crop suitability
    Rule(
        name="optimal_crop_selection",
        applies=lambda c: bool(suggest_crops(c)),
        practice="crop_selection",
        render_action=lambda c: f"Consider planting: {', '.join(suggest_crops(c))}",
        template={
            "type": "Optimal Crop Selection",
            "category": "crop_planning",
            "priority": "low",
            "severity": "low",
            "message": "Current soil conditions are well-suited for specific crop types.",
            "action": "",
            "details": "These crops are well-adapted to your current soil conditions and will likely perform "
                       "well with minimal amendments.",
            "timeline": "Next planting season",
            "cost": "Variable",
            "impact": "Medium - Optimizes crop success",
        },
    ),
    # 8. Sustainability
    Rule(
        name="carbon_sequestration",
        applies=lambda c: c.composition.organic_matter < 4,
        template={
            "type": "Carbon Sequestration",
            "category": "sustainability",
            "priority": "low",
            "severity": "low",
            "message": "Opportunity to increase soil carbon storage and improve environmental sustainability.",
            "action": "Implement carbon-building agricultural practices",
            "details": "Use no-till farming, diverse crop rotations, cover cropping, and integrated livestock grazing.",
            "timeline": "Long-term (2-5 years)",
            "cost": "Low",
            "impact": "High - Environmental and economic benefits",
            "seasonal_advice": "Year-round implementation",
        },
    ),
    Rule(
        name="biodiversity_enhancement",
        applies=lambda c: c.indices.ndvi < 0.6,
        practice="biodiversity",
        template={
            "type": "Biodiversity Enhancement",
            "category": "sustainability",
            "priority": "low",
            "severity": "low",
            "message": "Enhance on-farm biodiversity to improve ecosystem services.",
            "action": "Create habitat corridors and diverse plantings",
            "details": "Plant native hedgerows, establish pollinator strips, create wildlife corridors, "
                       "use diverse crop rotations.",
            "timeline": "Long-term (1-3 years)",
            "cost": "Medium",
            "impact": "Medium - Ecosystem benefits",
        },
    ),
)


def _build(rule: Rule, ctx: RuleContext, on_date: date) -> Recommendation:
    fields: Dict[str, Any] = dict(rule.template)
    if rule.render_action is not None:
        fields["action"] = rule.render_action(ctx)
    if rule.practice is not None:
        fields["seasonal_advice"] = get_seasonal_advice(rule.practice, ctx.location, on_date)
    fields.setdefault("seasonal_advice", DEFAULT_SEASONAL_ADVICE)
    return Recommendation(**fields)


def generate_recommendations(
    moisture: MoistureResult,
    composition: CompositionResult,
    indices: SpectralIndices,
    location: Location,
    on_date: Optional[date] = None,
    rules=RULES,
) -> List[Recommendation]:
    """
    Evaluates every rule and returns the recommendations that fired.

    Args:
        moisture, composition, indices: Estimates for the analysed scene.
        location: Analysed point.
        on_date: Date used for the seasonal advice lookup. Defaults to today.
        rules: Ordered rule table; defaults to RULES.

    Returns:
        Recommendations in rule order. Identical inputs give identical lists.
    """
    if on_date is None:
        on_date = date.today()
    elif isinstance(on_date, datetime):
        on_date = on_date.date()

    ctx = RuleContext(moisture=moisture, composition=composition, indices=indices, location=location)
    return [_build(rule, ctx, on_date) for rule in rules if rule.applies(ctx)]
