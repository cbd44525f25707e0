"""Exam definitions: conversion maps, composite rules and band tables."""

from types import MappingProxyType

from .. import config
from ..scoring.classify import Classification
from ..scoring.piecewise import (
    CompositeRule,
    CompositeStrategy,
    ExamDefinition,
    MapMode,
    PiecewiseMap,
    SectionSpec,
)

DIFFICULTY_LEVELS = ("easy", "normal", "hard")


def _expand_ranges(ranges: tuple[tuple[int, int, int], ...]) -> dict[int, int]:
    """Expand (first_raw, last_raw, scaled) bands into a {raw: scaled} table."""
    table = {}
    for first, last, scaled in ranges:
        for raw in range(first, last + 1):
            table[raw] = scaled
    return table


def _pairs(*values: int) -> dict[int, int]:
    """{raw: scaled} for consecutive raw scores starting at 0."""
    return dict(enumerate(values))


# ---------------------------------------------------------------------------
# GRE: 27 questions per section, 130-170
# ---------------------------------------------------------------------------

GRE_VERBAL_MAP = PiecewiseMap.from_raw_table("GRE Verbal", {
    0: 130, 3: 136, 5: 139, 7: 142, 9: 145, 11: 148, 13: 151,
    15: 154, 17: 157, 19: 160, 21: 163, 23: 165, 25: 170, 27: 170,
}, 27)

GRE_QUANT_MAP = PiecewiseMap.from_raw_table("GRE Quant", {
    0: 130, 4: 135, 6: 138, 8: 141, 10: 144, 12: 147, 14: 150,
    16: 153, 18: 156, 20: 159, 22: 162, 24: 165, 26: 170, 27: 170,
}, 27)

GRE_VERBAL_PERCENTILES = Classification.from_mapping("Verbal percentile", {
    130: 0, 131: 1, 132: 1, 133: 2, 134: 2, 135: 3, 136: 4, 137: 5, 138: 6,
    139: 8, 140: 9, 141: 11, 142: 13, 143: 16, 144: 18, 145: 21, 146: 23,
    147: 26, 148: 30, 149: 34, 150: 39, 151: 43, 152: 48, 153: 55, 154: 59,
    155: 65, 156: 69, 157: 73, 158: 77, 159: 80, 160: 84, 161: 86, 162: 89,
    163: 91, 164: 93, 165: 95, 166: 96, 167: 97, 168: 98, 169: 99, 170: 99,
})

GRE_QUANT_PERCENTILES = Classification.from_mapping("Quant percentile", {
    130: 0, 131: 0, 132: 0, 133: 1, 134: 1, 135: 1, 136: 2, 137: 2, 138: 3,
    139: 4, 140: 5, 141: 6, 142: 8, 143: 9, 144: 11, 145: 13, 146: 15,
    147: 18, 148: 21, 149: 23, 150: 25, 151: 29, 152: 31, 153: 34, 154: 36,
    155: 40, 156: 42, 157: 45, 158: 48, 159: 50, 160: 53, 161: 57, 162: 60,
    163: 63, 164: 66, 165: 70, 166: 74, 167: 78, 168: 83, 169: 87, 170: 92,
})

GRE = ExamDefinition(
    key="gre",
    name="GRE General Test",
    sections=(
        SectionSpec("verbal", "Verbal Reasoning", 27, scale_map=GRE_VERBAL_MAP,
                    percentiles=GRE_VERBAL_PERCENTILES),
        SectionSpec("quant", "Quantitative Reasoning", 27, scale_map=GRE_QUANT_MAP,
                    percentiles=GRE_QUANT_PERCENTILES),
    ),
    composite_rule=CompositeRule(output_range=(260, 340)),
    description="Correct answers out of 27 per section, scaled 130-170",
)

# ---------------------------------------------------------------------------
# SAT: paper (fixed curve) and digital (adaptive module difficulty)
# ---------------------------------------------------------------------------

SAT_PAPER_RW_MAP = PiecewiseMap.from_raw_table("SAT paper Reading & Writing", _pairs(
    200, 200, 210, 220, 230, 240, 250, 260, 270, 280, 290, 300, 310, 320, 330,
    340, 350, 360, 370, 380, 390, 400, 410, 420, 430, 440, 450, 460, 470, 480,
    490, 500, 510, 520, 530, 540, 550, 560, 570, 580, 590, 600, 610, 620, 630,
    640, 660, 670, 680, 690, 710, 730, 760, 780, 800,
), 54)

SAT_PAPER_MATH_MAP = PiecewiseMap.from_raw_table("SAT paper Math", _pairs(
    200, 200, 210, 220, 230, 240, 250, 260, 270, 280, 290, 300, 310, 320, 330,
    340, 350, 360, 370, 380, 390, 400, 410, 420, 430, 440, 450, 460, 470, 480,
    490, 500, 510, 520, 530, 540, 550, 560, 570, 580, 590, 600, 610, 620, 630,
    640, 650, 660, 670, 680, 690, 710, 730, 740, 750, 760, 780, 790, 800,
), 58)

SAT_DIGITAL_RW_MAPS = MappingProxyType({
    "easy": PiecewiseMap.from_raw_table("SAT digital Reading & Writing (easy)", _pairs(
        200, 200, 210, 220, 230, 240, 250, 260, 270, 280, 290, 300, 310, 320, 330,
        340, 350, 360, 370, 380, 390, 400, 410, 420, 430, 440, 450, 460, 470, 480,
        490, 500, 510, 520, 530, 540, 550, 560, 570, 580, 590, 600, 610, 620, 630,
        640, 650, 660, 670, 680, 690, 700, 710, 720, 730,
    ), 54),
    "normal": PiecewiseMap.from_raw_table("SAT digital Reading & Writing (normal)", _pairs(
        200, 200, 210, 230, 240, 260, 270, 280, 290, 300, 310, 320, 330, 340, 350,
        360, 370, 380, 390, 400, 410, 420, 430, 440, 450, 460, 480, 490, 500, 510,
        520, 530, 540, 550, 560, 570, 580, 590, 600, 610, 620, 630, 640, 650, 660,
        670, 680, 690, 700, 710, 720, 740, 760, 780, 800,
    ), 54),
    "hard": PiecewiseMap.from_raw_table("SAT digital Reading & Writing (hard)", _pairs(
        200, 200, 220, 240, 260, 280, 300, 310, 320, 330, 340, 350, 360, 370, 380,
        390, 400, 410, 420, 430, 440, 450, 460, 470, 480, 490, 500, 510, 520, 530,
        540, 550, 560, 570, 580, 590, 600, 610, 620, 630, 640, 650, 660, 670, 680,
        690, 700, 710, 720, 730, 740, 760, 770, 790, 800,
    ), 54),
})

SAT_DIGITAL_MATH_MAPS = MappingProxyType({
    "easy": PiecewiseMap.from_raw_table("SAT digital Math (easy)", _pairs(
        200, 200, 210, 230, 250, 270, 290, 310, 330, 340, 350, 360, 370, 380, 390,
        400, 410, 420, 430, 440, 450, 460, 470, 480, 490, 500, 510, 520, 530, 540,
        550, 560, 570, 580, 590, 600, 610, 630, 650, 670, 690, 710, 730, 750, 770,
    ), 44),
    "normal": PiecewiseMap.from_raw_table("SAT digital Math (normal)", _pairs(
        200, 200, 220, 240, 260, 280, 300, 320, 340, 360, 370, 380, 390, 400, 410,
        420, 430, 440, 450, 460, 470, 480, 490, 500, 510, 520, 530, 540, 550, 560,
        570, 580, 590, 600, 610, 620, 640, 660, 680, 700, 720, 740, 760, 780, 800,
    ), 44),
    "hard": PiecewiseMap.from_raw_table("SAT digital Math (hard)", _pairs(
        200, 200, 230, 250, 270, 290, 310, 330, 350, 370, 390, 410, 420, 430, 440,
        450, 460, 470, 480, 490, 500, 510, 520, 530, 540, 550, 560, 570, 580, 590,
        600, 610, 620, 630, 640, 650, 660, 680, 700, 720, 740, 760, 770, 790, 800,
    ), 44),
})

SAT_PERCENTILES = Classification.from_mapping("Percentile", {
    400: 1, 450: 1, 500: 1, 550: 2, 600: 3, 650: 5, 700: 8, 750: 11,
    800: 15, 850: 19, 900: 24, 950: 30, 1000: 37, 1050: 45, 1100: 53,
    1150: 61, 1200: 70, 1250: 78, 1300: 85, 1350: 91, 1400: 94,
    1450: 97, 1500: 98, 1550: 99, 1600: 99,
})

SAT_TO_ACT = Classification.from_mapping("ACT equivalent", {
    400: 1, 450: 1, 500: 1, 550: 2, 600: 3, 650: 5, 700: 7, 750: 9,
    800: 11, 850: 13, 900: 14, 950: 16, 1000: 17, 1050: 19, 1100: 20,
    1150: 22, 1200: 24, 1250: 25, 1300: 27, 1350: 28, 1400: 30,
    1450: 32, 1500: 34, 1550: 35, 1600: 36,
})

SAT_PAPER = ExamDefinition(
    key="sat-paper",
    name="SAT (paper)",
    sections=(
        SectionSpec("reading_writing", "Reading & Writing", 54, scale_map=SAT_PAPER_RW_MAP),
        SectionSpec("math", "Math", 58, scale_map=SAT_PAPER_MATH_MAP),
    ),
    composite_rule=CompositeRule(output_range=(400, 1600)),
    classifications=(SAT_PERCENTILES, SAT_TO_ACT),
    description="Paper SAT; math combines the no-calculator (20) and calculator (38) parts",
)

SAT_DIGITAL = ExamDefinition(
    key="sat-digital",
    name="SAT (digital)",
    sections=(
        SectionSpec("reading_writing", "Reading & Writing", 54, adaptive_maps=SAT_DIGITAL_RW_MAPS),
        SectionSpec("math", "Math", 44, adaptive_maps=SAT_DIGITAL_MATH_MAPS),
    ),
    composite_rule=CompositeRule(output_range=(400, 1600)),
    classifications=(SAT_PERCENTILES, SAT_TO_ACT),
    difficulties=DIFFICULTY_LEVELS,
    default_difficulty="auto",
    auto_thresholds=(config.AUTO_DIFFICULTY_EASY, config.AUTO_DIFFICULTY_HARD),
    description="Digital adaptive SAT; second-module difficulty selects the curve",
)

# ---------------------------------------------------------------------------
# LSAT: 101 questions, 120-180
# ---------------------------------------------------------------------------

LSAT_MAP = PiecewiseMap.from_raw_table("LSAT", {
    **_expand_ranges(((0, 17, 120), (18, 19, 121), (20, 21, 122))),
    22: 123, 23: 124, 24: 124, 25: 125, 26: 126, 27: 126, 28: 127, 29: 128,
    30: 128, 31: 129, 32: 130, 33: 130, 34: 131, 35: 132, 36: 132, 37: 133,
    38: 134, 39: 134, 40: 135, 41: 136, 42: 136, 43: 137, 44: 138, 45: 138,
    46: 139, 47: 140, 48: 140, 49: 141, 50: 142, 51: 142, 52: 143, 53: 144,
    54: 144, 55: 145, 56: 146, 57: 146, 58: 147, 59: 148, 60: 148, 61: 149,
    62: 150, 63: 150, 64: 151, 65: 152, 66: 152, 67: 153, 68: 154, 69: 154,
    70: 155, 71: 156, 72: 156, 73: 157, 74: 158, 75: 158, 76: 159, 77: 160,
    78: 161, 79: 161, 80: 162, 81: 163, 82: 164, 83: 164, 84: 165, 85: 166,
    86: 167, 87: 168, 88: 169, 89: 170, 90: 171, 91: 172, 92: 173, 93: 174,
    94: 175, 95: 176, 96: 177, 97: 178, 98: 179, 99: 180, 100: 180, 101: 180,
}, 101)

LSAT_PERCENTILES = Classification.from_mapping("Percentile", {
    120: 0.0, 121: 0.1, 122: 0.2, 123: 0.2, 124: 0.3, 125: 0.4, 126: 0.5,
    127: 0.7, 128: 0.9, 129: 1.2, 130: 1.5, 131: 1.9, 132: 2.4, 133: 3.0,
    134: 3.8, 135: 4.7, 136: 5.8, 137: 7.0, 138: 8.5, 139: 10.2, 140: 12.0,
    141: 14.4, 142: 16.8, 143: 19.4, 144: 22.3, 145: 25.5, 146: 28.9,
    147: 32.5, 148: 36.3, 149: 40.3, 150: 44.3, 151: 49.7, 152: 53.5,
    153: 57.3, 154: 61.1, 155: 64.8, 156: 68.3, 157: 71.7, 158: 74.8,
    159: 77.8, 160: 80.4, 161: 85.4, 162: 87.4, 163: 89.3, 164: 91.0,
    165: 92.5, 166: 93.8, 167: 95.0, 168: 96.0, 169: 96.8, 170: 97.5,
    171: 98.3, 172: 98.7, 173: 99.0, 174: 99.3, 175: 99.5, 176: 99.7,
    177: 99.8, 178: 99.9, 179: 99.9, 180: 99.9,
})

LAW_SCHOOL_TIERS = Classification.from_mapping("Law school tier", {
    120: "Below Average",
    145: "Safety Schools",
    155: "Regional Schools",
    160: "Top Regional Schools",
    168: "T14 Law Schools",
})

LSAT = ExamDefinition(
    key="lsat",
    name="LSAT",
    sections=(
        SectionSpec("raw", "Scored questions", 101, scale_map=LSAT_MAP),
    ),
    composite_rule=CompositeRule(output_range=(120, 180)),
    composite_label="Scaled",
    classifications=(LSAT_PERCENTILES, LAW_SCHOOL_TIERS),
    description="Correct answers across all scored sections, scaled 120-180",
)

# ---------------------------------------------------------------------------
# MCAT: four sections scaled 118-132, total 472-528
# ---------------------------------------------------------------------------

MCAT_59_MAP_BANDS = (
    (0, 9, 118), (10, 14, 119), (15, 18, 120), (19, 22, 121), (23, 26, 122),
    (27, 29, 123), (30, 32, 124), (33, 35, 125), (36, 38, 126), (39, 41, 127),
    (42, 44, 128), (45, 47, 129), (48, 50, 130), (51, 53, 131), (54, 59, 132),
)

MCAT_SCIENCE_MAP = PiecewiseMap.from_raw_table("MCAT science", _expand_ranges(MCAT_59_MAP_BANDS), 59)

MCAT_CARS_MAP = PiecewiseMap.from_raw_table("MCAT CARS", _expand_ranges(
    MCAT_59_MAP_BANDS[:-2] + ((51, 52, 131), (53, 53, 132))
), 53)

MCAT_PERCENTILES = Classification.from_mapping("Percentile", {
    472: 1, 480: 5, 488: 10, 494: 25, 500: 50,
    506: 75, 512: 90, 518: 95, 524: 99, 528: 100,
})

MCAT = ExamDefinition(
    key="mcat",
    name="MCAT",
    sections=(
        SectionSpec("chem_phys", "Chemical and Physical Foundations", 59, scale_map=MCAT_SCIENCE_MAP),
        SectionSpec("cars", "Critical Analysis and Reasoning", 53, scale_map=MCAT_CARS_MAP),
        SectionSpec("bio_biochem", "Biological and Biochemical Foundations", 59, scale_map=MCAT_SCIENCE_MAP),
        SectionSpec("psych_soc", "Psychological, Social, and Biological Foundations", 59,
                    scale_map=MCAT_SCIENCE_MAP),
    ),
    composite_rule=CompositeRule(output_range=(472, 528)),
    classifications=(MCAT_PERCENTILES,),
)

# ---------------------------------------------------------------------------
# ACT: four sections scaled 1-36, composite is their rounded mean
# ---------------------------------------------------------------------------

ACT_ENGLISH_MAP = PiecewiseMap.from_raw_table("ACT English", {
    0: 1, 10: 1, 11: 1, 12: 1, 13: 1, 14: 2, 15: 2, 16: 2, 17: 3, 18: 3,
    19: 4, 20: 4, 21: 5, 22: 5, 23: 6, 24: 6, 25: 7, 26: 7, 27: 8, 28: 8,
    29: 9, 30: 9, 31: 10, 32: 10, 33: 11, 34: 11, 35: 12, 36: 12, 37: 13,
    38: 13, 39: 14, 40: 14, 41: 15, 42: 15, 43: 16, 44: 16, 45: 17, 46: 17,
    47: 18, 48: 19, 49: 19, 50: 20, 51: 20, 52: 21, 53: 21, 54: 22, 55: 23,
    56: 23, 57: 24, 58: 24, 59: 25, 60: 26, 61: 26, 62: 27, 63: 27, 64: 28,
    65: 28, 66: 29, 67: 29, 68: 30, 69: 30, 70: 31, 71: 32, 72: 33, 73: 34,
    74: 35, 75: 36,
}, 75)

ACT_MATH_MAP = PiecewiseMap.from_raw_table("ACT Math", {
    0: 1, 7: 1, 8: 2, 9: 2, 10: 2, 11: 3, 12: 3, 13: 4, 14: 4, 15: 5,
    16: 5, 17: 6, 18: 6, 19: 7, 20: 7, 21: 8, 22: 8, 23: 9, 24: 9, 25: 10,
    26: 10, 27: 11, 28: 11, 29: 12, 30: 12, 31: 13, 32: 13, 33: 14, 34: 15,
    35: 15, 36: 16, 37: 16, 38: 17, 39: 18, 40: 18, 41: 19, 42: 20, 43: 20,
    44: 21, 45: 22, 46: 23, 47: 23, 48: 24, 49: 25, 50: 26, 51: 27, 52: 28,
    53: 29, 54: 30, 55: 31, 56: 32, 57: 33, 58: 34, 59: 35, 60: 36,
}, 60)

ACT_READING_MAP = PiecewiseMap.from_raw_table("ACT Reading", {
    0: 1, **{raw: raw for raw in range(1, 11)},
    11: 11, 12: 12, 13: 13, 14: 13, 15: 14, 16: 15, 17: 16, 18: 16, 19: 17,
    20: 18, 21: 19, 22: 19, 23: 20, 24: 21, 25: 22, 26: 23, 27: 23, 28: 24,
    29: 25, 30: 26, 31: 27, 32: 28, 33: 29, 34: 30, 35: 31, 36: 32, 37: 33,
    38: 34, 39: 35, 40: 36,
}, 40)

ACT_SCIENCE_MAP = PiecewiseMap.from_raw_table("ACT Science", {
    0: 1, **{raw: raw for raw in range(1, 11)},
    11: 11, 12: 11, 13: 12, 14: 13, 15: 13, 16: 14, 17: 15, 18: 16, 19: 16,
    20: 17, 21: 18, 22: 19, 23: 19, 24: 20, 25: 21, 26: 22, 27: 22, 28: 23,
    29: 24, 30: 25, 31: 26, 32: 27, 33: 28, 34: 29, 35: 30, 36: 31, 37: 33,
    38: 34, 39: 35, 40: 36,
}, 40)

ACT_CATEGORIES = Classification.from_mapping("Category", {
    1: "Low", 15: "Below Average", 20: "Average", 23: "Above Average",
    27: "Good", 30: "Excellent", 34: "Elite",
})

ACT_PERCENTILES = Classification.from_mapping("Percentile", {
    1: 0, 7: 1, 8: 1, 9: 2, 10: 3, 11: 5, 12: 8, 13: 12, 14: 17, 15: 22,
    16: 28, 17: 34, 18: 40, 19: 46, 20: 52, 21: 58, 22: 63, 23: 69, 24: 74,
    25: 78, 26: 82, 27: 86, 28: 89, 29: 92, 30: 94, 31: 96, 32: 97, 33: 98,
    34: 99, 35: 99, 36: 100,
})

ACT = ExamDefinition(
    key="act",
    name="ACT",
    sections=(
        SectionSpec("english", "English", 75, scale_map=ACT_ENGLISH_MAP),
        SectionSpec("math", "Math", 60, scale_map=ACT_MATH_MAP),
        SectionSpec("reading", "Reading", 40, scale_map=ACT_READING_MAP),
        SectionSpec("science", "Science", 40, scale_map=ACT_SCIENCE_MAP),
    ),
    composite_rule=CompositeRule(CompositeStrategy.MEAN, output_range=(1, 36)),
    composite_label="Composite",
    classifications=(ACT_CATEGORIES, ACT_PERCENTILES),
)

# ---------------------------------------------------------------------------
# UCAT: linear curve 300-900 per section, total 1200-3600
# ---------------------------------------------------------------------------

UCAT_MAP = PiecewiseMap("UCAT", (
    (0.0, 300), (0.3, 500), (0.6, 700), (0.8, 820), (1.0, 900),
), MapMode.LINEAR)

UCAT_COMPETITIVENESS = Classification.from_mapping("Competitiveness", {
    1200: "Less Competitive",
    2400: "Moderately Competitive",
    2600: "Competitive",
    2800: "Very Competitive",
    3000: "Highly Competitive",
})

UCAT = ExamDefinition(
    key="ucat",
    name="UCAT",
    sections=(
        SectionSpec("verbal", "Verbal Reasoning", 44, scale_map=UCAT_MAP),
        SectionSpec("decision", "Decision Making", 29, scale_map=UCAT_MAP),
        SectionSpec("quantitative", "Quantitative Reasoning", 36, scale_map=UCAT_MAP),
        SectionSpec("abstract", "Abstract Reasoning", 55, scale_map=UCAT_MAP),
    ),
    composite_rule=CompositeRule(output_range=(1200, 3600)),
    classifications=(UCAT_COMPETITIVENESS,),
    supports_adjustment=True,
    description="Supports a -10% to +10% test difficulty adjustment",
)

# ---------------------------------------------------------------------------
# GMAT Focus: three sections entered on 60-90, total 205-805
# ---------------------------------------------------------------------------

GMAT_PERCENTILES = Classification.from_mapping("Percentile", {
    205: "Below 20th", 485: "20th", 505: "30th", 525: "40th",
    545: "50th (Mean)", 565: "60th", 585: "65th", 605: "70th", 625: "75th",
    645: "80th", 665: "85th", 685: "90th", 705: "94th", 725: "96th",
    745: "98th", 775: "99th",
})

GMAT = ExamDefinition(
    key="gmat",
    name="GMAT Focus Edition",
    sections=(
        SectionSpec("quant", "Quantitative Reasoning", 90, minimum=60),
        SectionSpec("verbal", "Verbal Reasoning", 90, minimum=60),
        SectionSpec("data_insights", "Data Insights", 90, minimum=60),
    ),
    composite_rule=CompositeRule(CompositeStrategy.NORMALIZED_MEAN, output_range=(205, 805)),
    classifications=(GMAT_PERCENTILES,),
    description="Section scores 60-90 are averaged and rescaled to 205-805",
)

# ---------------------------------------------------------------------------
# AP exams: weighted composite, then cutoffs to a 1-5 score
# ---------------------------------------------------------------------------

AP_CALC_RULE = CompositeRule(CompositeStrategy.WEIGHTED_SUM, weights=(54 / 45, 1.0), output_range=(0, 108))

AP_CALC_SECTIONS = (
    SectionSpec("mcq", "Multiple choice (correct of 45)", 45),
    SectionSpec("frq", "Free response points (of 54)", 54),
)

AP_CALC_AB = ExamDefinition(
    key="ap-calc-ab",
    name="AP Calculus AB",
    sections=AP_CALC_SECTIONS,
    composite_rule=AP_CALC_RULE,
    classifications=(
        Classification.from_mapping("AP score", {0: 1, 31: 2, 44: 3, 56: 4, 68: 5}),
        Classification.from_mapping("Percentile", {0: 10, 31: 25, 44: 45, 56: 65, 68: 85}),
    ),
    description="Multiple choice is scaled to 54 points and added to free response",
)

AP_CALC_BC = ExamDefinition(
    key="ap-calc-bc",
    name="AP Calculus BC",
    sections=AP_CALC_SECTIONS,
    composite_rule=AP_CALC_RULE,
    classifications=(
        Classification.from_mapping("AP score", {0: 1, 29: 2, 38: 3, 50: 4, 64: 5}),
        Classification.from_mapping("Percentile", {0: 10, 29: 30, 38: 50, 50: 70, 64: 90}),
    ),
    description="Multiple choice is scaled to 54 points and added to free response",
)

APUSH = ExamDefinition(
    key="apush",
    name="AP U.S. History",
    sections=(
        SectionSpec("mcq", "Multiple choice (correct of 55)", 55),
        SectionSpec("saq", "Short answer points (of 9)", 9),
        SectionSpec("dbq", "Document-based question (of 7)", 7),
        SectionSpec("leq", "Long essay (of 6)", 6),
    ),
    composite_rule=CompositeRule(
        CompositeStrategy.WEIGHTED_SUM, weights=(1.09, 3.0, 5.35, 3.75), output_range=(0, 150),
    ),
    classifications=(
        Classification.from_mapping("AP score", {0: 1, 45: 2, 70: 3, 96: 4, 120: 5}),
        Classification.from_mapping("Percentile", {0: 18, 45: 37, 70: 62, 96: 85, 120: 100}),
    ),
)

EXAMS = MappingProxyType({
    exam.key: exam
    for exam in (GRE, SAT_DIGITAL, SAT_PAPER, LSAT, MCAT, ACT, UCAT, GMAT, AP_CALC_AB, AP_CALC_BC, APUSH)
})


def get_exam(key: str) -> ExamDefinition:
    """Look up an exam definition by key, raising KeyError with the valid keys."""
    try:
        return EXAMS[key.lower()]
    except KeyError:
        raise KeyError(f"Unknown exam '{key}'. Choose from: {', '.join(EXAMS)}") from None
