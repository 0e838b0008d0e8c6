"""Test config schemas and loaders.

Tests for opencad.utils.validators:
    - scene.v1: ops parse by discriminator, colors accept ints and hex strings
    - Rejects unknown ops, extra fields, negative sizes, non-.ppm outputs,
      duplicate scene names, wrong schema tag
    - examples.v1: defaults, palette parsing, grid finer than canvas
    - Loaders read the shipped configs and surface file/YAML errors

Run:
    pytest tests/test_validators.py -v
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from opencad.utils import validators

CONFIGS = Path(__file__).parent.parent / "configs"


def _scene(**overrides):
    base = {'name': 's', 'width': 10, 'height': 10, 'output': 's.ppm', 'ops': []}
    base.update(overrides)
    return base


def test_ops_by_discriminator():
    scene = validators.SceneV1.model_validate(_scene(ops=[
        {'op': 'fill', 'color': 0xFF000000},
        {'op': 'rect', 'x': -2, 'y': 1, 'w': 4, 'h': 0, 'color': '#ff0000'},
        {'op': 'circle', 'cx': 5, 'cy': 5, 'r': 3, 'color': '#00ff0080'},
        {'op': 'line', 'x1': 0, 'y1': 0, 'x2': 9, 'y2': 9, 'color': 1},
    ]))

    kinds = [type(op) for op in scene.ops]
    assert kinds == [validators.FillOp, validators.RectOp, validators.CircleOp, validators.LineOp]
    assert scene.ops[1].color == 0xFF0000FF
    assert scene.ops[2].color == 0x8000FF00


@pytest.mark.parametrize("op", [
    {'op': 'spiral', 'color': 0},
    {'op': 'fill'},
    {'op': 'fill', 'color': 'red'},
    {'op': 'fill', 'color': 0x1FFFFFFFF},
    {'op': 'fill', 'color': 0, 'alpha': 1},
    {'op': 'rect', 'x': 0, 'y': 0, 'w': -1, 'h': 2, 'color': 0},
    {'op': 'circle', 'cx': 0, 'cy': 0, 'r': -3, 'color': 0},
])
def test_bad_ops_rejected(op):
    with pytest.raises(ValidationError):
        validators.SceneV1.model_validate(_scene(ops=[op]))


@pytest.mark.parametrize("overrides", [
    {'name': ''},
    {'width': 0},
    {'height': 20000},
    {'output': 's.png'},
])
def test_bad_scene_rejected(overrides):
    with pytest.raises(ValidationError):
        validators.SceneV1.model_validate(_scene(**overrides))


def test_output_extension_case_insensitive():
    assert validators.SceneV1.model_validate(_scene(output='out/S.PPM')).output == 'out/S.PPM'


def test_scenes_file_schema_tag():
    ok = validators.ScenesFileV1.model_validate({'schema': 'scene.v1', 'scenes': [_scene()]})
    assert ok.schema_version == 'scene.v1'

    with pytest.raises(ValidationError):
        validators.ScenesFileV1.model_validate({'schema': 'scene.v2', 'scenes': [_scene()]})


def test_scenes_file_needs_scenes():
    with pytest.raises(ValidationError):
        validators.ScenesFileV1.model_validate({'schema': 'scene.v1', 'scenes': []})


def test_duplicate_scene_names():
    with pytest.raises(ValidationError, match="Duplicate scene names"):
        validators.ScenesFileV1.model_validate({
            'schema': 'scene.v1',
            'scenes': [_scene(), _scene(output='other.ppm')],
        })


def test_examples_defaults():
    cfg = validators.ExamplesConfigV1()
    assert (cfg.width, cfg.height, cfg.cols, cfg.rows) == (800, 600, 16, 12)
    assert cfg.palette.background == 0xFF202020
    assert cfg.palette.brick_edge == 0xFFFFFFFF


def test_examples_palette_hex():
    cfg = validators.ExamplesConfigV1.model_validate({'palette': {'axis': '#3030ff'}})
    assert cfg.palette.axis == 0xFFFF3030
    assert cfg.palette.foreground == 0xFF2020FF


def test_examples_grid_finer_than_canvas():
    with pytest.raises(ValidationError, match="finer"):
        validators.ExamplesConfigV1(width=8, height=8, cols=16, rows=4)


def test_load_shipped_configs():
    cfg = validators.load_examples_config(CONFIGS / "examples.yaml")
    assert cfg.output_dir == "outputs/examples"
    assert cfg.palette.accent == 0xFF20FF20

    scenes = validators.load_scene_file(CONFIGS / "scenes" / "brick.yaml")
    assert [s.name for s in scenes.scenes] == ["brick", "target"]
    assert len(scenes.scenes[0].ops) == 11


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        validators.load_scene_file(tmp_path / "missing.yaml")


def test_load_bad_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("scenes: [unclosed\n")
    with pytest.raises(yaml.YAMLError):
        validators.load_scene_file(path)


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    with pytest.raises(ValidationError):
        validators.load_scene_file(path)
