'''
Copyright (c) 2009, Don Peterson
Copyright (c) 2011, Vernon Mauery
All rights reserved.

Redistribution and use in source and binary forms, with or
without modification, are permitted provided that the following
conditions are met:

* Redistributions of source code must retain the above copyright
notice, this list of conditions and the following disclaimer.
* Redistributions in binary form must reproduce the above
copyright notice, this list of conditions and the following
disclaimer in the documentation and/or other materials provided
with the distribution.
* The names of the contributors may not be used to endorse or
promote products derived from this software without specific
prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
"AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR
A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
OWNER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY
THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
(INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
'''

'''
Command line entry point.  With -s or -r the calculator reads lines of
input and prints the stack after each one; otherwise the curses
interface runs.
'''

import sys
from optparse import OptionParser

from . import __version__
from .calculator import Calculator, status_ok, status_quit
from .debug import debug
from .display import Display

def ParseCommandLine(args=None):
    usage = "usage: %prog [options]"
    descr = "Terminal RPN calculator"
    parser = OptionParser(usage, description=descr)
    d,s,r,l,D,v = ("Don't load config.lua and config.py",
                   "Take input from stdin",
                   "Read input from file",
                   "Append messages to a log file",
                   "Show function and line number in error messages",
                   "Display program version")
    parser.add_option("-d", "--default-config", action="store_true", help=d)
    parser.add_option("-s", "--read-stdin", action="store_true", help=s)
    parser.add_option("-r", "--read-file", dest="file", help=r)
    parser.add_option("-l", "--log", dest="log", help=l)
    parser.add_option("-D", "--debug", action="store_true", help=D)
    parser.add_option("-v", "--version", action="store_true", help=v)
    return parser.parse_args(args=args)

def run_batch(calculator, stream):
    '''Submit each line of stream and show the stack after it.  Returns
    the exit status:  1 if any line failed.
    '''
    failed = False
    for line in stream:
        status = calculator.submit(line.rstrip("\n"))
        if status == status_quit:
            break
        if status != status_ok:
            failed = True
        calculator.DisplayStack()
    return 1 if failed else 0

def main(argv=None):
    opt, arg = ParseCommandLine(argv)
    if opt.version:
        print("rpncalc version %s" % __version__)
        return 0
    if opt.debug:
        debug(True)
    batch = opt.read_stdin or opt.file
    if batch:
        display = Display()
    else:
        from .tui import StatusDisplay
        display = StatusDisplay()
    log = None
    try:
        if opt.log:
            log = open(opt.log, "a")
            display.logon(log)
        calculator = Calculator(display, use_default_config_only=opt.default_config)
        if opt.file:
            with open(opt.file) as f:
                return run_batch(calculator, f)
        elif opt.read_stdin:
            return run_batch(calculator, sys.stdin)
        else:
            from . import tui
            return tui.run(calculator)
    except OSError as e:
        sys.stderr.write("rpncalc: %s\n" % e)
        return 2
    except KeyboardInterrupt:
        return 0
    finally:
        display.logoff()
        if log:
            log.close()

if __name__ == "__main__":
    sys.exit(main())
