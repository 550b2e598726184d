import os
import sys
from pathlib import Path

from ratiocard.config import Config
from ratiocard.pipeline.convert_pipeline import ConvertPipeline

def get_option(argv, flag: str, env: str, default: str = "") -> str:
    # command-line flag first, then environment variable
    if flag in argv:
        idx = argv.index(flag)
        if idx + 1 < len(argv):
            return argv[idx + 1].strip()
    return os.getenv(env, default).strip()

def get_int_option(argv, flag: str, env: str):
    raw = get_option(argv, flag, env)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{flag} expects an integer, got {raw!r}") from None

def build_config(argv) -> Config:
    out_dir = get_option(argv, "--out", "RATIOCARD_OUT")
    kwargs = {"SOURCE_PATH": get_option(argv, "--source", "RATIOCARD_SOURCE")}
    for key, flag, env in (
        ("BLUR_INTENSITY", "--blur", "RATIOCARD_BLUR"),
        ("CUSTOM_WIDTH", "--width", "RATIOCARD_WIDTH"),
        ("CUSTOM_HEIGHT", "--height", "RATIOCARD_HEIGHT"),
    ):
        value = get_int_option(argv, flag, env)
        if value is not None:
            kwargs[key] = value
    if out_dir:
        kwargs["OUT_DIR"] = Path(out_dir)
    return Config(**kwargs)

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        cfg = build_config(argv)
    except ValueError as e:
        raise SystemExit(f"ERROR: {e}")
    preset_id = get_option(argv, "--preset", "RATIOCARD_PRESET") or None
    ConvertPipeline(cfg).run(preset_id)

if __name__ == "__main__":
    main()
