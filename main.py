import sys

import argslot

MODES = ("fast", "slow", "auto")


def main(argv=None):
    argslot.init(sys.argv if argv is None else argv, desc="Example program demonstrating argslot usage")

    verbose = argslot.flag_bool("v", "verbose", desc="enable verbose output")
    retries = argslot.flag_uint("r", "retries", 3, meta_var="N", desc="number of retries")
    output = argslot.flag_str("o", "output", "default.txt", meta_var="FILE", desc="output file name")

    id = argslot.pos_uint("id", 0, required=True, desc="the ID to process")
    name = argslot.pos_str("name", "Yorgos Lanthimos", desc="the name to use")
    mode = argslot.pos_enum("mode", MODES, MODES.index("auto"), desc="mode to use")

    if not argslot.parse_args():
        argslot.print_error()
        return 1

    print("Verbose: %s" % ("true" if verbose else "false"))
    print("Retries: %d" % retries.value)
    print("Output file: %s" % output.value)
    print("ID: %d" % id.value)
    print("Name: %s" % name.value)
    print("Mode: %s" % mode.choice)
    return 0


if __name__ == '__main__':
    sys.exit(main())
