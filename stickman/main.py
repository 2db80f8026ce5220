# stickman/main.py
"""
CLI entrypoint.

  python -m stickman.main generate "A throws a vase at B" --seed 7 -o scene.json
  python -m stickman.main validate scene.json
  python -m stickman.main render scene.json -o outputs/scene.mp4 --onion-skin
  python -m stickman.main bones scene.json
"""
import argparse
import sys
from pathlib import Path

from .config import load_settings
from .errors import SceneError
from .log import configure_logging
from .pose import skeleton_deviations
from .remote import generate_scene_from_prompt
from .validator import check_scene, export_scene, parse_scene


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def cmd_generate(args, settings) -> int:
    text = " ".join(args.text)
    try:
        scene = generate_scene_from_prompt(text, args.seed, settings)
    except SceneError as e:
        print(f"❌ {e}")
        return 1
    out = export_scene(scene)
    if args.output:
        Path(args.output).write_text(out, encoding="utf-8")
        print(f"✅ Scene written: {args.output}")
    else:
        print(out)
    return 0


def cmd_validate(args, settings) -> int:
    ok, scene, errors = check_scene(_read(args.path))
    if ok:
        print(f"✅ valid scene: {scene.frame_count} frames, {len(scene.catalog)} catalog objects")
        return 0
    print(f"❌ {len(errors)} problem(s):")
    for e in errors:
        print("  -", e)
    return 1


def cmd_render(args, settings) -> int:
    from .video import export_video

    try:
        scene = parse_scene(_read(args.path))
    except SceneError as e:
        print(f"❌ {e}")
        return 1
    video = export_video(scene, args.output, onion_skin=args.onion_skin)
    print(f"✅ Video created: {video}")
    return 0


def cmd_bones(args, settings) -> int:
    try:
        scene = parse_scene(_read(args.path))
    except SceneError as e:
        print(f"❌ {e}")
        return 1
    warnings = skeleton_deviations(scene, tolerance_px=args.tolerance)
    for w in warnings:
        print(f"frame {w['frame']:2d} actor {w['actor']}: {w['joint1']}-{w['joint2']} off by {w['deviation']:.1f}px")
    print(f"{len(warnings)} bone(s) outside ±{args.tolerance}px")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stickman")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("generate", help="synthesize a throw scene")
    p.add_argument("text", nargs="+")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("-o", "--output", default=None)
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser("validate", help="validate a scene JSON file")
    p.add_argument("path")
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser("render", help="render a scene JSON file to mp4/gif")
    p.add_argument("path")
    p.add_argument("-o", "--output", default=None)
    p.add_argument("--onion-skin", action="store_true")
    p.set_defaults(func=cmd_render)

    p = sub.add_parser("bones", help="report bone lengths that drift from the skeleton template")
    p.add_argument("path")
    p.add_argument("--tolerance", type=float, default=2.0)
    p.set_defaults(func=cmd_bones)
    return parser


def main(argv=None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)
    args = build_parser().parse_args(argv)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
