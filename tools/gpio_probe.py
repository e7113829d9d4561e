# -- coding: utf-8 --

"""Read the switch pin once (pull-up biased) and print its level."""

import argparse

from gpiozero import DigitalInputDevice


def main():
	p = argparse.ArgumentParser(description="Print the level of a pull-up GPIO input once and exit")
	p.add_argument("--pin", type=int, default=17, help="BCM pin number of the switch")
	args = p.parse_args()

	with DigitalInputDevice(args.pin, pull_up=True) as dev:
		# Pull-up: the device reads active while the pin is held low.
		low = bool(dev.is_active)
		print(f"GPIO{args.pin} In: low={low} level={'LOW' if low else 'HIGH'}")


if __name__ == "__main__":
	main()
