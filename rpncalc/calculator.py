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

"""
Provide the basic calculational engine for the calculator.

The Calculator owns the stack, the table of operations, the contents of
the input text box and the configuration.  A user interface feeds it
lines with submit() and shows the stack and messages; the curses
interface is in tui.py and the line oriented batch mode in main.py.
"""

import copy
import os

import mpmath as m
from mpmath import mp, mpf, mpc

from .debug import fln
from .display import Display
from .extensions import Extensions, config_dir, reserved_names
from .number import Number, Format
from .operations import BUILTIN, Operation, OperationTable
from .parser import NUMBER, ParseError, tokenize
from .stack import CalcException, Stack

# Status numbers that can be returned
status_ok               = 0
status_quit             = 1
status_error            = 2
status_unknown_command  = 3

class ConfigError(CalcException):
    pass

def isint(x):
    return isinstance(x, int) and not isinstance(x, bool)

class Calculator(object):
    def __init__(self, display=None, use_default_config_only=False,
                 environ=None, settings=None):
        self.errors = []
        self.stack = Stack()
        self.text_box = ""           # Input not yet submitted
        self.previous = ""           # Last token that was executed
        self.history = []            # Submitted lines, oldest first
        self.finished = False
        self.display = display or Display()
        self.number = Number()
        self.operations = OperationTable()
        self.use_default_config_only = use_default_config_only
        self.environ = os.environ if environ is None else environ

        #---------------------------------------------------------------------------
        # Configuration information.

        self.cfg = {
            # If any of these environment variables exist, submit their
            # contents as a line of input once the configuration files
            # have been loaded.
            "environment" : ["RPNCALCINIT"],

            # Directory holding config.lua, config.py and the history file.
            # Empty means $RPNCALC_CONFIG_DIR, else $XDG_CONFIG_HOME/rpncalc,
            # else ~/.config/rpncalc.
            "config_dir" : "",

            # Load the base.lua file shipped with the program before the
            # user's configuration files.
            "load_base" : True,

            # Angle mode:  must be either 'deg' or 'rad'
            "angle_mode" : "rad",

            # If true, we'll allow x/0 to be infinity as long as x != 0
            "allow_divide_by_zero" : True,

            # Set how many digits of precision the mpmath library should use.
            "prec" : 30,

            # Significant figures shown for each stack value.
            "fp_digits" : 12,

            # How many items of the stack to show in batch mode.  Use 0 for all.
            "stack_display" : 0,

            # Milliseconds the terminal interface waits for a key before
            # it redraws anyway.
            "tick_ms" : 200,

            # Keep the input history in the configuration directory from run
            # to run, up to history_size lines.
            "persist_history" : True,
            "history_size" : 500,
        }
        if settings:
            self.cfg.update(settings)
        self.ConfigChanged()

        self.commands_dict = {
            # Values are
            # [
            #   implementation function to call,
            #   number of stack arguments consumed,
            # ]

            # Binary functions
            "+"        : [self.add, 2],
            "-"        : [self.subtract, 2],
            "*"        : [self.multiply, 2],
            "/"        : [self.divide, 2],
            "^"        : [self.power, 2],   # Raise y to the power of x

            # Unary functions
            "neg"      : [self.negate, 1],  # negative of x
            "inv"      : [self.negate, 1],
            "pred"     : [self.pred, 1],    # x - 1
            "succ"     : [self.succ, 1],    # x + 1
            "sqrt"     : [self.sqrt, 1],
            "ln"       : [self.ln, 1],      # Natural logarithm
            "d2r"      : [self.ToRadians, 1],

            # trig functions
            "sin"      : [self.sin, 1],
            "cos"      : [self.cos, 1],
            "tan"      : [self.tan, 1],
            "asin"     : [self.asin, 1],
            "acos"     : [self.acos, 1],
            "atan"     : [self.atan, 1],

            # Stack functions
            "swap"     : [self.swap, 2],    # swap x and y
            "drop"     : [self.drop, 1],    # Pop x off the stack
            "dup"      : [self.dup, 1],     # Push a copy of x onto the stack
            "over"     : [self.over, 2],    # push y onto the stack at the top
            "roll"     : [self.roll, 0],    # Move x to the bottom of the stack
            "depth"    : [self.depth, 0],   # Push stack depth onto stack
            "clr"      : [self.ClearStack, 0],

            # constants
            "pi"       : [self.Pi, 0],
            "e"        : [self.E, 0],

            # Other stuff
            "deg"      : [self.deg, 0],     # Set degrees for angle mode
            "rad"      : [self.rad, 0],     # Set radians for angle mode
            "prec"     : [self.Prec, 1],    # Set calculation precision
            "digits"   : [self.digits, 1],  # Set significant figures for display
            "cfg"      : [self.ShowConfig, 0],
            "reload"   : [self.Reload, 0],  # Read the configuration files again
            "quit"     : [self.quit, 0],
        }
        for name, (function, n) in self.commands_dict.items():
            self.operations.register(Operation(name, n, function, BUILTIN))

        # cfg_builtin holds the values before the configuration files run;
        # cfg_default the values after, which reset() goes back to.
        self.cfg_builtin = copy.deepcopy(self.cfg)
        self.cfg_default = copy.deepcopy(self.cfg)
        self.extensions = Extensions(self.operations, self.ConfigDir(),
                                     namespace={"cfg" : self.cfg})
        self.LoadExtensions()
        self.CheckEnvironment()

    #---------------------------------------------------------------------------
    # Utility functions

    def error(self, msg):
        self.errors.append(msg)
        self.display.err(msg)

    def ConfigDir(self):
        return self.cfg["config_dir"] or config_dir(self.environ)

    def LoadExtensions(self, reload=False):
        '''Run the configuration files, starting from the built in cfg
        values.  With reload, operations from earlier runs are dropped first.
        '''
        self.SetConfig(self.cfg_builtin)
        if reload:
            load = self.extensions.reload
        else:
            load = self.extensions.load_all
        errors = load(self.cfg["load_base"], not self.use_default_config_only)
        for e in errors:
            self.error(e)
        try:
            self.ConfigChanged()
        except ConfigError as e:
            self.error(str(e))
            self.SetConfig(self.cfg_builtin)
        self.cfg_default = copy.deepcopy(self.cfg)

    def SetConfig(self, values):
        'Replace the contents of cfg, which config.py holds a reference to.'
        self.cfg.clear()
        self.cfg.update(copy.deepcopy(values))
        self.ConfigChanged()

    def CheckEnvironment(self):
        '''Submit the contents of the environment variables named in
        cfg["environment"].
        '''
        for var in self.cfg["environment"]:
            if var in self.environ:
                self.submit(self.environ[var])

    def ConfigChanged(self):
        '''Check the configuration values and apply the ones that live
        outside the cfg dictionary.
        '''
        for key in ("prec", "fp_digits", "tick_ms"):
            if not isint(self.cfg[key]) or self.cfg[key] < 1:
                raise ConfigError("%s'%s' value in configuration is bad" % (fln(), key))
        if not isint(self.cfg["history_size"]) or self.cfg["history_size"] < 0:
            raise ConfigError("%s'history_size' value in configuration is bad" % fln())
        if self.cfg["angle_mode"] not in ("deg", "rad"):
            raise ConfigError("%s'angle_mode' must be 'deg' or 'rad'" % fln())
        mp.dps = self.cfg["prec"]

    def Format(self, x):
        return Format(x, self.cfg["fp_digits"])

    def Conv2Deg(self, x):
        """
        Routine to convert a result to degrees.  This is typically done
        after calling inverse trig functions.
        """
        if self.cfg["angle_mode"] == "deg" and not isinstance(x, mpc):
            return m.degrees(x)
        return x

    def Conv2Rad(self, x):
        """
        Routine to convert an argument to radians.  This is typically done
        before calling trig functions.
        """
        if self.cfg["angle_mode"] == "deg" and not isinstance(x, mpc):
            return m.radians(x)
        return x

    #---------------------------------------------------------------------------
    # Input handling

    def submit(self, text=None):
        '''Run a line of input; text defaults to the text box.  Tokens run
        left to right.  If one fails, the ones before it keep their
        effect and the failing token and the rest of the line are left in
        the text box so they can be corrected.  An empty line repeats the
        previous operation.
        '''
        if text is None:
            text = self.text_box
        if not text.strip():
            return self.repeat()
        self.AddHistory(text)
        try:
            tokens = tokenize(text)
        except ParseError as e:
            self.error(str(e))
            self.text_box = text
            return status_error
        for i, (kind, token) in enumerate(tokens):
            if token.lower() in reserved_names:
                if i + 1 < len(tokens):
                    self.help(tokens[i + 1][1])
                else:
                    self.help()
                break
            status = self.execute(kind, token)
            if status == status_quit:
                self.text_box = ""
                return status
            if status != status_ok:
                self.text_box = " ".join(t for k, t in tokens[i:])
                return status
            self.previous = token
        self.text_box = ""
        return status_ok

    def repeat(self):
        '''Apply the previous token again if it was an operation.'''
        if self.previous and self.previous in self.operations:
            return self.execute("word", self.previous)
        return status_ok

    def execute(self, kind, token):
        op = self.operations.lookup(token)
        if op is None or kind == NUMBER:
            x = self.number(token)
            if x is not None:
                self.stack.push(x)
                return status_ok
        if op is None:
            self.error("%sUnknown operation '%s'" % (fln(), token))
            return status_unknown_command
        try:
            self.stack.apply(op.function, op.arity, op.name)
        except CalcException as e:
            self.error(str(e))
            return status_error
        if self.finished:
            return status_quit
        return status_ok

    def reset(self):
        '''Empty the stack and the text box and forget the previous
        operation and errors.
        '''
        self.stack.clear_stack()
        self.text_box = ""
        self.previous = ""
        self.errors = []
        self.SetConfig(self.cfg_default)

    def clear_text_box(self):
        self.text_box = ""

    def DisplayStack(self):
        size = self.cfg["stack_display"]
        if len(self.stack):
            self.display.msg(self.stack._string(self.Format, size))

    #---------------------------------------------------------------------------
    # History

    def HistoryFile(self):
        return os.path.join(self.ConfigDir(), "history")

    def AddHistory(self, line):
        if not self.history or self.history[-1] != line:
            self.history.append(line)
        size = self.cfg["history_size"]
        if len(self.history) > size:
            del self.history[:len(self.history) - size]

    def LoadHistory(self):
        try:
            with open(self.HistoryFile()) as f:
                lines = [line.rstrip("\n") for line in f]
        except OSError:
            return
        self.history = [line for line in lines if line.strip()]
        if self.cfg["history_size"]:
            self.history = self.history[-self.cfg["history_size"]:]
        else:
            self.history = []

    def SaveHistory(self):
        if not self.cfg["persist_history"]:
            return
        path = self.HistoryFile()
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w") as f:
                for line in self.history:
                    f.write(line + "\n")
        except OSError as e:
            self.error("%sCould not write history file %s: %s" % (fln(), path, e))

    #---------------------------------------------------------------------------
    # Binary functions

    def add(self, y, x):
        """
    Usage: y x +

    Return the sum of the bottom two items on the stack (y + x)
        """
        return y + x

    def subtract(self, y, x):
        """
    Usage: y x -

    Return the difference of the bottom two items on the stack (y - x)
        """
        return y - x

    def multiply(self, y, x):
        """
    Usage: y x *

    Return the product of the bottom two items on the stack (y * x)
        """
        return y*x

    def divide(self, y, x):
        """
    Usage: y x /

    Return the quotient of the bottom two items on the stack (y / x)
        """
        if x == 0:
            if m.isnan(y):
                return m.nan
            if self.cfg["allow_divide_by_zero"]:
                if y > 0:
                    return m.inf
                elif y < 0:
                    return -m.inf
                else:
                    raise ValueError("%s0/0 is ambiguous" % fln())
            else:
                raise ValueError("%sCan't divide by zero" % fln())
        return y/x

    def power(self, y, x):
        """
    Usage: y x ^

    Return y raised to the power x
        """
        return m.power(y, x)

    #---------------------------------------------------------------------------
    # Unary functions

    def negate(self, x):
        """
    Usage: x neg

    Returns the negative of x.  inv is the same operation.
        """
        return -x

    def pred(self, x):
        """
    Usage: x pred

    Returns x - 1
        """
        return x - 1

    def succ(self, x):
        """
    Usage: x succ

    Returns x + 1
        """
        return x + 1

    def sqrt(self, x):
        """
    Usage: x sqrt

    Returns the square root of x (complex if x < 0)
        """
        return m.sqrt(x)

    def ln(self, x):
        """
    Usage: x ln

    Returns the natural logarithm of x
        """
        return m.ln(x)

    def ToRadians(self, x):
        """
    Usage: x d2r

    Convert x from degrees to radians
        """
        return m.radians(x)

    def sin(self, x):
        """
    Usage: x sin

    Returns the sine of the top item on the stack
        """
        return m.sin(self.Conv2Rad(x))

    def cos(self, x):
        """
    Usage: x cos

    Returns the cosine of the top item on the stack
        """
        return m.cos(self.Conv2Rad(x))

    def tan(self, x):
        """
    Usage: x tan

    Returns the tangent of the top item on the stack
        """
        return m.tan(self.Conv2Rad(x))

    def asin(self, x):
        """
    Usage: x asin

    Returns the arc-sine of the top item on the stack
        """
        return self.Conv2Deg(m.asin(x))

    def acos(self, x):
        """
    Usage: x acos

    Returns the arc-cosine of the top item on the stack
        """
        return self.Conv2Deg(m.acos(x))

    def atan(self, x):
        """
    Usage: x atan

    Returns the arc-tangent of the top item on the stack
        """
        return self.Conv2Deg(m.atan(x))

    #---------------------------------------------------------------------------
    # Stack functions

    def swap(self, y, x):
        """
    Usage: y x swap

    Exchange x and y
        """
        return x, y

    def drop(self, x):
        """
    Usage: x drop

    Remove x from the stack
        """
        return None

    def dup(self, x):
        """
    Usage: x dup

    Push a copy of x onto the stack
        """
        return x, x

    def over(self, y, x):
        """
    Usage: y x over

    Push a copy of y onto the stack
        """
        return y, x, y

    def roll(self):
        """
    Usage: roll

    Move x to the bottom of the stack
        """
        if len(self.stack):
            self.stack.roll()

    def depth(self):
        """
    Usage: depth

    Push the number of items on the stack
        """
        return mpf(len(self.stack))

    def ClearStack(self):
        """
    Usage: clr

    Remove all items from the stack
        """
        self.stack.clear_stack()

    #---------------------------------------------------------------------------
    # Constants

    def Pi(self):
        """
    Usage: pi

    Push pi onto the stack
        """
        return +m.pi

    def E(self):
        """
    Usage: e

    Push e onto the stack
        """
        return +m.e

    #---------------------------------------------------------------------------
    # Settings

    def deg(self):
        """
    Usage: deg

    Trig functions take and inverse trig functions return degrees
        """
        self.cfg["angle_mode"] = "deg"

    def rad(self):
        """
    Usage: rad

    Trig functions take and inverse trig functions return radians
        """
        self.cfg["angle_mode"] = "rad"

    def Prec(self, x):
        """
    Usage: x prec

    Set the calculation precision to x decimal digits
        """
        if x != int(x) or x < 1:
            raise ValueError("%sprecision must be a whole number > 0" % fln())
        self.cfg["prec"] = int(x)
        if self.cfg["fp_digits"] > self.cfg["prec"]:
            self.cfg["fp_digits"] = self.cfg["prec"]
        self.ConfigChanged()

    def digits(self, x):
        """
    Usage: x digits

    Show x significant figures for each stack value
        """
        if x != int(x) or x < 1:
            raise ValueError("%snumber of digits must be a whole number > 0" % fln())
        self.cfg["fp_digits"] = min(int(x), self.cfg["prec"])

    def ShowConfig(self):
        """
    Usage: cfg

    Shows the current config
        """
        keys = sorted(self.cfg)
        width = max(len(k) for k in keys)
        for k in keys:
            self.display.msg("%-*s  %r" % (width, k, self.cfg[k]))

    def Reload(self):
        """
    Usage: reload

    Read the configuration files again
        """
        self.LoadExtensions(reload=True)
        self.display.msg("%d operations" % len(self.operations))

    def quit(self):
        """
    Usage: quit

    Exits the program
        """
        self.finished = True

    def help(self, name=None):
        """
    Usage: help [function]

    Lists the functions implemented or displays help for the
    requested function
        """
        if name is not None:
            if name.lower() in reserved_names:
                self.display.msg("help (takes a name, builtin)")
                self.ShowDoc(self.help.__doc__)
                return
            op = self.operations.lookup(name)
            if op is None:
                self.display.msg("unknown function: %s" % name)
                return
            self.display.msg("%s (takes %d, %s)" % (op.name, op.arity, op.source))
            if op.doc:
                self.ShowDoc(op.doc)
            else:
                self.display.msg("No help for %s" % op.name)
            return
        functions = sorted(self.operations.names() + ["help"])
        maxlen = max(len(k) for k in functions) + 1
        per_line = max(1, 72//maxlen)
        for i in range(0, len(functions), per_line):
            row = functions[i:i + per_line]
            self.display.msg("".join(k.ljust(maxlen) for k in row).rstrip())

    def ShowDoc(self, doc):
        lines = [l.strip() for l in doc.strip().splitlines()]
        self.display.msg("\n".join(lines))
