# -- coding: utf-8 --

"""Capture one frame from a configured camera; optionally PUT it to every endpoint."""

import argparse
import sys

from camera import CaptureError, build_camera_config, create_camera
from core.config import DEFAULT_CONFIG_PATH, ConfigError, load_config, validate_config
from output.endpoints import build_endpoint_table_from_loaded_config
from output.uploader import Uploader, UploadError


def main():
	p = argparse.ArgumentParser(description="Capture a single snapshot and exit")
	p.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to the YAML config file")
	p.add_argument("--camera", default="", help="Camera name (default: first configured)")
	p.add_argument("--out", default="", help="Write the frame to this file")
	p.add_argument("--upload", action="store_true", help="PUT info and snapshot to every endpoint")
	args = p.parse_args()

	try:
		cfg = load_config(args.config)
		validate_config(cfg)
	except ConfigError as e:
		print(f"Config error: {e}")
		sys.exit(1)

	blocks = [c for c in cfg.cameras if not args.camera or c.name == args.camera]
	if not blocks:
		print(f"No camera named {args.camera!r} in {cfg.path}")
		sys.exit(1)
	cam_cfg = build_camera_config(blocks[0])

	try:
		image = create_camera(cam_cfg).capture_frame()
	except CaptureError as e:
		print(f"Capture failed on {cam_cfg.device}: {e}")
		sys.exit(2)
	print(f"Captured {len(image)} bytes from {cam_cfg.name} ({cam_cfg.device})")

	if args.out:
		with open(args.out, "wb") as f:
			f.write(image)
		print(f"Saved {args.out}")

	if not args.upload:
		return
	uploader = Uploader(timeout_s=float(cfg.runtime.upload_timeout_s or 0.0))
	failed = False
	for ep in build_endpoint_table_from_loaded_config(cfg):
		try:
			if ep.info_url:
				uploader.put_info(ep.info_url, cam_cfg, cam_cfg.token, cam_cfg.fingerprint)
			uploader.put_image(ep.snapshot_url, image, cam_cfg.token, cam_cfg.fingerprint)
			print(f"{ep.name}: OK")
		except UploadError as e:
			failed = True
			print(f"{ep.name}: {e}")
	uploader.close()
	if failed:
		sys.exit(3)


if __name__ == "__main__":
	main()
