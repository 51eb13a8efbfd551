"""RepoReview Analysis Engine"""

from reporeview.analyzer.base import Analyzer
from reporeview.analyzer.code_quality import CodeQualityAnalyzer
from reporeview.analyzer.complexity import ComplexityAnalyzer
from reporeview.analyzer.documentation import DocumentationAnalyzer
from reporeview.analyzer.real_world import RealWorldAnalyzer
from reporeview.analyzer.security import SecurityAnalyzer
from reporeview.analyzer.structure import StructureAnalyzer
from reporeview.analyzer.tech_stack import TechStackAnalyzer
from reporeview.analyzer.testing import TestingAnalyzer
from reporeview.analyzer.version_control import VersionControlAnalyzer
from reporeview.analyzer.orchestrator import Orchestrator, default_analyzers
from reporeview.analyzer.scoring import ScoringEngine
from reporeview.analyzer.narrative import generate_summary
from reporeview.analyzer.roadmap import generate_roadmap
from reporeview.analyzer.pipeline import AnalysisPipeline

__all__ = [
    "Analyzer",
    "CodeQualityAnalyzer",
    "ComplexityAnalyzer",
    "DocumentationAnalyzer",
    "RealWorldAnalyzer",
    "SecurityAnalyzer",
    "StructureAnalyzer",
    "TechStackAnalyzer",
    "TestingAnalyzer",
    "VersionControlAnalyzer",
    "Orchestrator",
    "default_analyzers",
    "ScoringEngine",
    "generate_summary",
    "generate_roadmap",
    "AnalysisPipeline",
]
