import json
import subprocess
import sys
from pathlib import Path
from PIL import Image, ImageDraw

SCRIPT = Path(__file__).resolve().parent.parent / "paintmatch.py"


def run_cli(*args):
    return subprocess.run(
        [sys.executable, str(SCRIPT), *[str(a) for a in args]],
        capture_output=True,
        text=True
    )


def create_dummy_image(path: Path):
    img = Image.new("RGB", (256, 256), color=(150, 120, 200))
    draw = ImageDraw.Draw(img)
    draw.rectangle([(50, 50), (150, 150)], fill=(200, 50, 50))
    draw.ellipse([(100, 100), (200, 200)], fill=(50, 200, 50))
    img.save(path)


def test_cli_help_output():
    result = run_cli("--help")
    assert result.returncode == 0
    assert "usage" in result.stdout.lower()
    for command in ("mix", "palette", "pigments"):
        assert command in result.stdout


def test_mix_exact_pigment():
    result = run_cli("mix", "138,51,36")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "100% Burnt Umber" in result.stdout
    assert "#8A3324" in result.stdout
    assert "Accuracy: 100% (Excellent match)" in result.stdout


def test_mix_accepts_hex_target():
    result = run_cli("mix", "#181818")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "100% Ivory Black" in result.stdout


def test_mix_rejects_invalid_target():
    result = run_cli("mix", "#12G")
    assert result.returncode == 1
    assert "Invalid target color" in result.stdout + result.stderr


def test_mix_with_custom_pigments(tmp_path):
    catalog = tmp_path / "pigments.json"
    catalog.write_text(json.dumps([
        {"name": "Red", "hex": "#C80000"},
        {"name": "Blue", "hex": "#0000C8"},
    ]))
    result = run_cli("mix", "150,0,50", "--pigments", catalog)
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "3 parts Red + 1 part Blue" in result.stdout


def test_palette_json_output(tmp_path):
    input_image = tmp_path / "red.png"
    Image.new("RGB", (20, 20), color=(255, 0, 0)).save(input_image)

    result = run_cli("palette", input_image, "--num-colors", "2", "--seed", "1", "--json")

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert json.loads(result.stdout.strip()) == ["#FF0000", "#FF0000"]


def test_palette_with_preset(tmp_path):
    input_image = tmp_path / "dummy_input.png"
    create_dummy_image(input_image)

    result = run_cli("palette", input_image, "--preset", "quick", "--seed", "3", "--json")

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    palette = json.loads(result.stdout.strip())
    assert len(palette) == 5


def test_palette_unknown_preset(tmp_path):
    input_image = tmp_path / "dummy_input.png"
    create_dummy_image(input_image)
    result = run_cli("palette", input_image, "--preset", "extreme")
    assert result.returncode == 1


def test_pigments_listing():
    result = run_cli("pigments")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    lines = [line for line in result.stdout.splitlines() if line.strip()]
    assert len(lines) == 12
    assert any("Titanium White" in line and "white" in line for line in lines)
    assert any("Ivory Black" in line and "dark" in line for line in lines)


def test_mix_with_malformed_pigments_file(tmp_path):
    catalog = tmp_path / "pigments.json"
    catalog.write_text(json.dumps([{"name": "Odd", "hex": "#FF0000", "rgb": 5}]))
    result = run_cli("mix", "1,2,3", "--pigments", catalog)
    assert result.returncode == 1
    assert "invalid rgb" in result.stdout
    assert "Traceback" not in result.stdout + result.stderr
