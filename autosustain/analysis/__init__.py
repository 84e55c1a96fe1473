from autosustain.analysis.classifier import (
    classify,
    filter_category,
    match_category,
    strip_markup,
    total_count,
)
from autosustain.analysis.thresholds import evaluate, evaluate_set, is_triggered
