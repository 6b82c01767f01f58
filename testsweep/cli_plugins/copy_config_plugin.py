from .base import SubcommandPlugin
from testsweep.input.presets import PRESET_DIR, find_preset, list_presets
import os
import shutil


class CopyConfigPlugin(SubcommandPlugin):
    def __init__(self, preset_dir=PRESET_DIR):
        self.preset_dir = preset_dir

    def get_name(self):
        return "copy-config"

    def get_parser(self, subparsers):
        parser = self.add_subparser(
            subparsers, help="List or copy bundled sweep presets. Lists presets if --output not specified."
        )
        parser.add_argument("preset", nargs="?", help="Preset name (e.g. correct)")
        parser.add_argument("--all", action="store_true", help="Copy all presets")
        parser.add_argument("--output", help="Destination path to copy the preset file(s)")
        parser.add_argument("--force", action="store_true", help="Force overwrite of existing files")
        return parser

    def get_epilog(self):
        return """
Copy-Config Commands:
  testsweep copy-config                                 List all bundled presets
  testsweep copy-config correct --output my_sweep.json  Copy a preset to edit it
  testsweep copy-config --all --output /tmp/sweeps/     Copy all presets
  testsweep copy-config --all --output /tmp/sweeps/ --force   Force overwrite existing files"""

    def _copy(self, src, dest, force):
        """Copy one file. Returns True on success."""
        if os.path.exists(dest) and not force:
            print(f"Error: File {dest} already exists. Use --force to overwrite.")
            return False
        try:
            shutil.copyfile(src, dest)
        except OSError as e:
            print(f"Error copying {src} to {dest}: {e}")
            return False
        return True

    def run(self, args):
        presets = list_presets(self.preset_dir)

        if args.all:
            if not args.output:
                print("Error: --output required when using --all")
                return
            try:
                os.makedirs(args.output, exist_ok=True)
            except OSError as e:
                print(f"Error creating output directory {args.output}: {e}")
                return
            copied_count = 0
            for preset in presets:
                src = find_preset(preset, self.preset_dir)
                dest = os.path.join(args.output, os.path.basename(src))
                if not self._copy(src, dest, args.force):
                    return
                copied_count += 1
            print(f"Copied {copied_count} presets to {args.output}")
            return

        if not args.output:
            if presets:
                print(f"Presets under {self.preset_dir}:")
                for preset in presets:
                    print(f"  {preset}")
            else:
                print("No presets found.")
            return

        if not args.preset:
            print("Error: preset name required for copying")
            return

        src = find_preset(args.preset, self.preset_dir)
        if not src:
            print(f"Preset not found: {args.preset}")
            return
        if os.path.isdir(args.output):
            dest = os.path.join(args.output, os.path.basename(src))
        else:
            dest = args.output
        dest_dir = os.path.dirname(dest)
        if dest_dir:
            os.makedirs(dest_dir, exist_ok=True)
        if self._copy(src, dest, args.force):
            print(f"Copied {src} to {dest}")
