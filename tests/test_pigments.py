import json
import pytest
from paint import pigments
from paint.colors import hex_to_rgb


def test_universal_palette_is_consistent():
    palette = pigments.UNIVERSAL_PALETTE
    assert len(palette) == 12
    assert len({p.name for p in palette}) == 12
    for p in palette:
        assert hex_to_rgb(p.hex) == p.rgb
        assert all(0 <= c <= 255 for c in p.rgb)
        assert p.type in pigments.PIGMENT_TYPES


def test_split_catalog_roles():
    whites, darks, colors = pigments.split_catalog(pigments.UNIVERSAL_PALETTE)
    assert [p.name for p in whites] == ["Titanium White"]
    assert [p.name for p in darks] == ["Burnt Umber", "Ivory Black"]
    assert len(colors) == 9
    assert all(not pigments.is_white(p) and not pigments.is_near_black(p) for p in colors)


def test_pigment_validation():
    with pytest.raises(ValueError):
        pigments.Pigment("Bad", "#FFFFFF", (256, 0, 0), "Primary")
    with pytest.raises(ValueError):
        pigments.Pigment("Bad", "#FFFFF", (255, 255, 255), "Primary")
    with pytest.raises(ValueError):
        pigments.Pigment("Bad", "#FFFFFF", (255, 255, 255), "Fluorescent")


def test_load_pigments_from_json(tmp_path):
    catalog_file = tmp_path / "pigments.json"
    catalog_file.write_text(json.dumps([
        {"name": "Zinc White", "hex": "#fdfdfd", "type": "Neutral"},
        {"name": "Raw Umber", "hex": "#734A12", "rgb": {"r": 115, "g": 74, "b": 18}, "type": "Earth"},
        {"name": "Phthalo Blue", "hex": "#000F89"},
    ]))

    catalog = pigments.load_pigments(catalog_file)

    assert [p.name for p in catalog] == ["Zinc White", "Raw Umber", "Phthalo Blue"]
    assert catalog[0].rgb == (253, 253, 253)
    assert catalog[0].hex == "#FDFDFD"
    assert catalog[1].rgb == (115, 74, 18)
    assert catalog[2].type == "Primary"


def test_load_pigments_rejects_bad_files(tmp_path):
    empty = tmp_path / "empty.json"
    empty.write_text("[]")
    with pytest.raises(ValueError):
        pigments.load_pigments(empty)

    dupes = tmp_path / "dupes.json"
    dupes.write_text(json.dumps([{"name": "A", "hex": "#000000"}, {"name": "A", "hex": "#FFFFFF"}]))
    with pytest.raises(ValueError):
        pigments.load_pigments(dupes)

    garbage = tmp_path / "garbage.json"
    garbage.write_text("{not json")
    with pytest.raises(ValueError):
        pigments.load_pigments(garbage)

    with pytest.raises(FileNotFoundError):
        pigments.load_pigments(tmp_path / "missing.json")


def test_pigment_hex_must_match_rgb():
    with pytest.raises(ValueError, match="does not match"):
        pigments.Pigment("Lying White", "#000000", (255, 255, 255), "Neutral")


def test_load_pigments_rejects_mismatched_hex_and_rgb(tmp_path):
    catalog_file = tmp_path / "mismatch.json"
    catalog_file.write_text(json.dumps([{"name": "Lying White", "hex": "#000000", "rgb": [255, 255, 255]}]))
    with pytest.raises(ValueError):
        pigments.load_pigments(catalog_file)


@pytest.mark.parametrize("bad_rgb", [5, True, "255,255,255", [255, 255], [True, 0, 0], [1.5, 0, 0]])
def test_load_pigments_rejects_malformed_rgb(tmp_path, bad_rgb):
    catalog_file = tmp_path / "bad_rgb.json"
    catalog_file.write_text(json.dumps([{"name": "Odd", "hex": "#FF0000", "rgb": bad_rgb}]))
    with pytest.raises(ValueError):
        pigments.load_pigments(catalog_file)


def test_load_pigments_normalizes_hex(tmp_path):
    catalog_file = tmp_path / "bare_hex.json"
    catalog_file.write_text(json.dumps([{"name": "Zinc White", "hex": "fdfdfd", "type": "Neutral"}]))
    catalog = pigments.load_pigments(catalog_file)
    assert catalog[0].hex == "#FDFDFD"
    assert catalog[0].rgb == (253, 253, 253)
