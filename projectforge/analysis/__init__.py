"""Website analysis: style, structure, section and detected-feature generators."""

from projectforge.analysis.feature_gen import (
    classify_path,
    collect_detected_features,
    generate_feature_files,
)
from projectforge.analysis.loader import (
    AnalysisExportResult,
    AnalysisSummary,
    analysis_summary,
    process_analysis,
)
from projectforge.analysis.section_gen import generate_section_components
from projectforge.analysis.structure_gen import generate_structure_files
from projectforge.analysis.style_gen import generate_style_files

__all__ = [
    "AnalysisExportResult",
    "AnalysisSummary",
    "analysis_summary",
    "classify_path",
    "collect_detected_features",
    "generate_feature_files",
    "generate_section_components",
    "generate_structure_files",
    "generate_style_files",
    "process_analysis",
]
