"""purebcrypt.__main__ -- command line helper tool

usage: python -m purebcrypt <command> [options]
"""
#=========================================================
#imports
#=========================================================
# core
import getpass
from optparse import OptionParser
import logging; log = logging.getLogger(__name__)
import sys
import time
# package
from purebcrypt import __version__, generate_salt, hash_password, verify_password
from purebcrypt.config import BcryptConfig
from purebcrypt.exc import BcryptError
from purebcrypt.handlers.bcrypt import BCrypt

vstr = "purebcrypt " + __version__

#=========================================================
# general support funcs
#=========================================================
def _add_config_option(p):
    p.add_option("-c", "--config", dest="config", default=None, metavar="PATH",
                 help="load settings from INI file (section [purebcrypt])")

def _load_config(opts):
    if opts.config:
        return BcryptConfig.from_path(opts.config)
    return None

def _read_password(args, prompt="Password: "):
    if args:
        return args.pop(0)
    return getpass.getpass(prompt)

#=========================================================
# gensalt, hash & verify commands
#=========================================================
def gensalt_cmd(args):
    """generate a new salt string"""
    p = OptionParser(prog="purebcrypt gensalt", version=vstr,
                     usage="%prog [options]",
                     description="This subcommand will output a freshly generated bcrypt salt string.")
    p.add_option("-r", "--rounds", dest="rounds", default=None, type="int",
                 metavar="NUM", help="specify cost parameter (4-31)")
    p.add_option("-i", "--ident", dest="ident", default=None,
                 help="specify version identifier (2a, 2b, 2y)")
    _add_config_option(p)
    opts, args = p.parse_args(args)
    if args:
        p.error("Unexpected positional arguments")
    print(generate_salt(opts.rounds, opts.ident, config=_load_config(opts)))
    return 0

def hash_cmd(args):
    """hash password"""
    p = OptionParser(prog="purebcrypt hash", version=vstr,
                     usage="%prog [options] [<password>]",
                     description="This subcommand will hash the specified password, "
                                 "and output a single line containing the result.")
    p.add_option("-s", "--salt", dest="salt", default=None,
                 help="specify fixed salt string (or existing hash)")
    p.add_option("-r", "--rounds", dest="rounds", default=None, type="int",
                 metavar="NUM", help="specify cost parameter for generated salt")
    p.add_option("-i", "--ident", dest="ident", default=None,
                 help="specify version identifier for generated salt")
    _add_config_option(p)
    opts, args = p.parse_args(args)
    if opts.salt is not None and (opts.rounds is not None or opts.ident is not None):
        p.error("--rounds and --ident can't be combined with --salt")
    config = _load_config(opts)
    password = _read_password(args)
    if args:
        p.error("Unexpected positional arguments")
    salt = opts.salt
    if salt is None:
        salt = generate_salt(opts.rounds, opts.ident, config=config)
    print(hash_password(password, salt, config=config))
    return 0

def verify_cmd(args):
    """verify password against hash"""
    p = OptionParser(prog="purebcrypt verify", version=vstr,
                     usage="%prog [options] <hash> [<password>]",
                     description="This subcommand will attempt to verify the hash against "
                                 "the specified password, and output success or failure.")
    _add_config_option(p)
    opts, args = p.parse_args(args)
    if not args:
        p.error("no hash specified")
    hash = args.pop(0)
    password = _read_password(args)
    if args:
        p.error("Unexpected positional arguments")
    if verify_password(password, hash, config=_load_config(opts)):
        print("password VERIFIED successfully.")
        return 0
    else:
        print("password FAILED to verify.")
        return 1

#=========================================================
# benchmark command
#=========================================================
def benchmark_cmd(args):
    """measure hashing speed for one or more cost settings"""
    p = OptionParser(prog="purebcrypt benchmark", version=vstr,
                     usage="%prog [options] [<rounds> ...]",
                     description="This command times a single bcrypt hash at each of "
                                 "the given cost settings (default: 4 5 6).")
    p.add_option("-t", "--target-time", action="store", type="float",
                 dest="target_time", default=.25, metavar="SECONDS",
                 help="display cost setting required for hash()"
                      " to take specified time (default=%default)")
    p.add_option("--csv", action="store_true", dest="csv", default=False,
                 help="Output results in CSV format")
    opts, args = p.parse_args(args)
    try:
        costs = [int(arg) for arg in args] or [4, 5, 6]
    except ValueError:
        p.error("rounds must be integers")

    if opts.csv:
        fmt = "%s,%s,%s"
    else:
        fmt = "%-10s %12s %12s"
        print(fmt % ("rounds", "seconds", "hashes/sec"))
        print(fmt % ("-" * 10, "-" * 12, "-" * 12))

    best = None
    for rounds in costs:
        salt = BCrypt.genconfig(rounds=rounds)
        start = time.perf_counter()
        hash_password("benchmark", salt)
        delta = time.perf_counter() - start
        log.debug("rounds=%d took %.4fs", rounds, delta)
        print(fmt % (rounds, "%.4f" % delta, "%.2f" % (1 / delta)))
        # each extra round doubles the cost, so extrapolate from this sample
        if delta > 0:
            estimate = rounds
            while delta * 2 ** (estimate - rounds + 1) <= opts.target_time:
                estimate += 1
            best = estimate
    if best is not None and not opts.csv:
        print("\nestimated rounds for %.2fs: %d" %
              (opts.target_time, min(max(best, BCrypt.min_rounds), BCrypt.max_rounds)))
    return 0

#=========================================================
# main
#=========================================================
commands = {
    "gensalt": gensalt_cmd,
    "hash": hash_cmd,
    "verify": verify_cmd,
    "benchmark": benchmark_cmd,
}

def _print_avail():
    print("Available commands:")
    for name, func in sorted(commands.items()):
        doc = getattr(func, "__doc__", None)
        doc = doc.splitlines()[0] if doc else ""
        print(" %-10s %s" % (name, doc))

def _print_usage():
    print("purebcrypt %s Command Line Helper\n"
          "Usage: python -m purebcrypt <command> [options|--help]\n" % (__version__,))
    _print_avail()

def main(args):
    if not args:
        _print_usage()
        return 1
    cmd = args[0]
    if cmd in ["help", "-h", "--help"]:
        _print_usage()
        return 0
    elif cmd in ["version", "--version", "-v"]:
        print(vstr)
        return 0
    func = commands.get(cmd)
    if not func:
        print("Unknown command: %s\n" % (cmd,))
        _print_avail()
        return 1
    try:
        return func(args[1:])
    except BcryptError as err:
        print("error: %s" % (err,))
        return 1

def _entry():
    "console script entry point"
    sys.exit(main(sys.argv[1:]))

if __name__ == "__main__":
    _entry()

#=========================================================
# eof
#=========================================================
