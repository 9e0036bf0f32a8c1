"""Pinned matcher, layout, and taxonomy configuration."""

from pydantic import BaseModel, Field


class MatcherConfig(BaseModel):
    """Scoring thresholds for the skill matcher."""

    # (minimum adjusted percentage, level), checked top-down
    language_thresholds: tuple[tuple[float, int], ...] = Field(
        default=((30.0, 5), (20.0, 4), (10.0, 3), (5.0, 2), (1.0, 1))
    )
    repo_count_divisor: float = Field(default=1.5)
    max_level: int = Field(default=5)
    min_level: int = Field(default=1)


class LayoutConfig(BaseModel):
    """Fixed geometry of the radial skill tree."""

    canvas_width: float = Field(default=800.0)
    center_x: float = Field(default=400.0)
    center_y: float = Field(default=380.0)
    inner_radius: float = Field(default=160.0)
    ring_spacing: float = Field(default=130.0)
    arc_fraction: float = Field(default=0.7)
    max_skills_per_category: int = Field(default=3)
    bottom_padding: float = Field(default=40.0)
    min_height: float = Field(default=400.0)

    # Node boxes are sized from their label
    char_width: float = Field(default=7.0)
    label_padding: float = Field(default=24.0)
    center_size: tuple[float, float] = Field(default=(140.0, 50.0))
    category_size: tuple[float, float] = Field(default=(110.0, 34.0))
    skill_size: tuple[float, float] = Field(default=(96.0, 28.0))
    precision: int = Field(default=2)


class TaxonomyConfig(BaseModel):
    """Bundled taxonomy sources and relevance triggers."""

    package_data: str = Field(default="skill_tree.data.taxonomy")
    always_load: tuple[str, ...] = Field(default=("languages", "meta"))
    # source name -> terms that make the source relevant for a signal
    triggers: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: {
            "web": (
                "javascript", "typescript", "html", "css", "php", "ruby",
                "react", "vue", "angular", "django", "flask", "express",
                "web", "api", "frontend", "backend",
            ),
            "data": (
                "python", "jupyter notebook", "r", "sql", "database", "data",
                "pandas", "numpy", "tensorflow", "pytorch", "ml", "postgres",
                "mongo", "redis",
            ),
            "devops": (
                "dockerfile", "shell", "hcl", "docker", "kubernetes", "k8s",
                "terraform", "ansible", "ci", "aws", "azure", "gcp", "deploy",
                "test", "security",
            ),
            "mobile": (
                "kotlin", "swift", "dart", "objective-c", "java", "android",
                "ios", "flutter", "mobile",
            ),
        }
    )
    request_timeout: float = Field(default=15.0)


MATCHER_CONFIG = MatcherConfig()
LAYOUT_CONFIG = LayoutConfig()
TAXONOMY_CONFIG = TaxonomyConfig()
