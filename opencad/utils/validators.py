"""YAML schema validation and config loading.

Provides centralized validation for configuration files using pydantic:
    - Scene schema (scene.v1): canvas size, output file, ordered drawing ops
    - Examples schema (examples.v1): canvas, grid and palette of the example
      pictures

Colors accept packed ints (0xAABBGGRR, YAML hex literals work) or
"#RRGGBB" / "#RRGGBBAA" strings; both validate to the packed int.

Usage:
    from opencad.utils import validators

    scenes = validators.load_scene_file("configs/scenes/brick.yaml")
    examples_cfg = validators.load_examples_config("configs/examples.yaml")
"""

from pathlib import Path
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from opencad.utils import color as color_utils
from opencad.utils import fs


# ============================================================================
# SCENE SCHEMA V1
# ============================================================================

class _ColorOp(BaseModel):
    """Base for drawing operations carrying a packed color."""
    model_config = ConfigDict(extra='forbid')

    color: int = Field(..., description="Packed 0xAABBGGRR or '#RRGGBB[AA]'")

    @field_validator('color', mode='before')
    @classmethod
    def validate_color(cls, v):
        return color_utils.parse_color(v)


class FillOp(_ColorOp):
    """Fill the whole canvas."""
    op: Literal["fill"]


class RectOp(_ColorOp):
    """Fill [x, x+w) x [y, y+h); may extend past the canvas."""
    op: Literal["rect"]
    x: int
    y: int
    w: int = Field(..., ge=0, description="Width in pixels")
    h: int = Field(..., ge=0, description="Height in pixels")


class CircleOp(_ColorOp):
    """Fill the disk of radius r around (cx, cy)."""
    op: Literal["circle"]
    cx: int
    cy: int
    r: int = Field(..., ge=0, description="Radius in pixels")


class LineOp(_ColorOp):
    """Draw the segment (x1, y1)-(x2, y2)."""
    op: Literal["line"]
    x1: int
    y1: int
    x2: int
    y2: int


DrawOp = Annotated[Union[FillOp, RectOp, CircleOp, LineOp], Field(discriminator='op')]


class SceneV1(BaseModel):
    """A named canvas, its output file and the ops drawn onto it in order."""
    model_config = ConfigDict(extra='forbid')

    name: str = Field(..., min_length=1)
    width: int = Field(..., gt=0, le=16384, description="Canvas width (px)")
    height: int = Field(..., gt=0, le=16384, description="Canvas height (px)")
    output: str = Field(..., description="Output PPM path (relative to output dir)")
    ops: List[DrawOp] = Field(default_factory=list)

    @field_validator('output')
    @classmethod
    def validate_output(cls, v: str) -> str:
        if not v.lower().endswith('.ppm'):
            raise ValueError(f"Scene output must be a .ppm file, got: {v}")
        return v


class ScenesFileV1(BaseModel):
    """Container for multiple scenes (YAML file format)."""
    model_config = ConfigDict(populate_by_name=True, extra='forbid')

    schema_version: Literal["scene.v1"] = Field("scene.v1", alias="schema")
    scenes: List[SceneV1] = Field(..., min_length=1)

    @model_validator(mode='after')
    def validate_unique_names(self) -> 'ScenesFileV1':
        names = [s.name for s in self.scenes]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate scene names: {duplicates}")
        return self


# ============================================================================
# EXAMPLES SCHEMA V1
# ============================================================================

class ExamplesPalette(BaseModel):
    """Colors used by the example pictures."""
    model_config = ConfigDict(extra='forbid')

    background: int = 0xFF202020
    foreground: int = 0xFF2020FF
    accent: int = 0xFF20FF20
    axis: int = 0xFFFF3030
    brick_background: int = 0xFF000000
    brick_edge: int = 0xFFFFFFFF

    @field_validator('*', mode='before')
    @classmethod
    def validate_colors(cls, v):
        return color_utils.parse_color(v)


class ExamplesConfigV1(BaseModel):
    """Canvas, grid and palette for checker/circle/lines/brick."""
    model_config = ConfigDict(populate_by_name=True, extra='forbid')

    schema_version: Literal["examples.v1"] = Field("examples.v1", alias="schema")
    width: int = Field(800, gt=0, le=16384)
    height: int = Field(600, gt=0, le=16384)
    cols: int = Field(16, gt=0)
    rows: int = Field(12, gt=0)
    output_dir: str = "."
    palette: ExamplesPalette = Field(default_factory=ExamplesPalette)

    @model_validator(mode='after')
    def validate_grid(self) -> 'ExamplesConfigV1':
        if self.cols > self.width or self.rows > self.height:
            raise ValueError(
                f"Grid {self.cols}x{self.rows} is finer than the "
                f"{self.width}x{self.height} canvas"
            )
        return self


# ============================================================================
# LOADERS
# ============================================================================

def load_scene_file(path: Union[str, Path]) -> ScenesFileV1:
    """Load and validate a scene.v1 YAML file.

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails
    pydantic.ValidationError
        If the content doesn't match the schema
    """
    return ScenesFileV1.model_validate(fs.load_yaml(path))


def load_examples_config(path: Union[str, Path]) -> ExamplesConfigV1:
    """Load and validate an examples.v1 YAML file (same errors as load_scene_file)."""
    return ExamplesConfigV1.model_validate(fs.load_yaml(path))
