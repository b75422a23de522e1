#!/usr/bin/env python3
import argparse
import logging

from cas import CAS
from expression import IrrationalConstant, NamedVariable
from expressions import add, divide, int_, multiply, pow_, rational, subtract


def examples():
    x = NamedVariable("x")
    return [
        add(rational(1, 6), rational(3, 4)),
        pow_(int_(3645), rational(1, 12)),
        divide(int_(5), IrrationalConstant.PI),
        multiply(subtract(x, int_(1)), add(x, int_(1))),
    ]


def main(argv=None):
    ap = argparse.ArgumentParser(description="Simplify a few sample expressions")
    ap.add_argument("--radix", type=int, default=10)
    ap.add_argument("--expand", action="store_true", help="multiply out sums")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    cas = CAS()
    for expr in examples():
        result = cas.expand(expr) if args.expand else cas.simplify(expr)
        print(f"{expr.to_string(args.radix)}  =>  {result.to_string(args.radix)}")

if __name__ == "__main__":
    main()
