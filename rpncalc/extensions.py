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
User extensions.

Operations are added at start-up by configuration files that call

    register(name, arity, function)

name is matched case-insensitively, arity is the number of values the
function takes off the stack (deepest first) and function returns one
value or a sequence of values to push back.  None (nil in Lua) entries
in a sequence are skipped, so Lua's `return 1, nil, 3` pushes 1 and 3.
Two languages are supported, with one file each in the configuration
directory:

    config.lua      run in an embedded Lua interpreter (lupa)
    config.py       run as Python

Lua files are loaded first.  If both languages define a name, the
Python definition wins regardless of load order (see operations.py).
The base.lua file next to this module is loaded before either of them.
'''

import math
import os

import mpmath
from lupa import LuaError, LuaRuntime, lua_type

from .operations import LUA, PYTHON, Operation
from .stack import CalcException

class ExtensionError(CalcException):      pass
class RegistrationError(ExtensionError):  pass

base_lua = os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.lua")

lua_config = "config.lua"
python_config = "config.py"

# Handled by the calculator before operations are looked up
reserved_names = ("help", "?")

def config_dir(environ=None):
    '''Per-user configuration directory.  $RPNCALC_CONFIG_DIR overrides
    the XDG location.
    '''
    if environ is None:
        environ = os.environ
    if environ.get("RPNCALC_CONFIG_DIR"):
        return environ["RPNCALC_CONFIG_DIR"]
    base = environ.get("XDG_CONFIG_HOME") or \
        os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, "rpncalc")

def to_value(x):
    '''Convert a number returned by an extension to a stack value.'''
    if isinstance(x, (mpmath.mpf, mpmath.mpc)):
        return x
    if isinstance(x, bool) or not isinstance(x, (int, float, complex)):
        raise ValueError("extension returned %r, not a number" % (x,))
    return mpmath.mpmathify(x)

def to_values(result):
    if result is None:
        return []
    if isinstance(result, (list, tuple)):
        return [to_value(x) for x in result if x is not None]
    return [to_value(result)]

class PythonFunction(object):
    'Calls a function from config.py and normalizes what it returns.'
    def __init__(self, function):
        self.function = function
        self.__doc__ = function.__doc__

    def __call__(self, *args):
        return to_values(self.function(*args))

class LuaFunction(object):
    '''Calls a function defined in Lua.  Lua only has doubles, so the
    arguments go in as floats.  Multiple return values (or a returned
    table) become multiple results.  A table gives its array part, t[1]
    to t[#t]; other keys are ignored.
    '''
    def __init__(self, function):
        self.function = function
        self.__doc__ = None

    def __call__(self, *args):
        floats = []
        for x in args:
            if isinstance(x, mpmath.mpc):
                if x.imag != 0:
                    raise ValueError("Lua functions only take real numbers")
                x = x.real
            floats.append(float(x))
        result = self.function(*floats)
        if lua_type(result) == "table":
            # The array part only, 1 .. #t
            result = [result[i] for i in range(1, len(result) + 1)]
        return to_values(result)

class Registrar(object):
    '''The register() function handed to configuration files.  Each
    instance registers into one table on behalf of one source.  When
    function is omitted it works as a decorator:

        @register("sp", 2)
        def sum_product(a, b):
            return a + b, a*b
    '''
    def __init__(self, table, source, wrap):
        self.table = table
        self.source = source
        self.wrap = wrap
        self.registered = []
        self.ignored = []

    def __call__(self, name, arity, function=None):
        if function is None:
            def decorator(function):
                self(name, arity, function)
                return function
            return decorator
        name, arity = self.check(name, arity, function)
        op = Operation(name, arity, self.wrap(function), self.source)
        if self.table.register(op):
            self.registered.append(op.name)
        else:
            self.ignored.append(op.name)

    def check(self, name, arity, function):
        if not isinstance(name, str) or not name or name.split() != [name]:
            raise RegistrationError("register: bad operation name %r" % (name,))
        if name.lower() in reserved_names:
            raise RegistrationError("register: '%s' is reserved" % name)
        if isinstance(arity, float) and arity.is_integer():
            arity = int(arity)
        if isinstance(arity, bool) or not isinstance(arity, int) or arity < 0:
            raise RegistrationError("register: arity of '%s' must be an "
                                    "integer >= 0, not %r" % (name, arity))
        if not callable(function):
            raise RegistrationError("register: '%s' needs a function" % name)
        return name, arity

class Extensions(object):
    '''Loads the configuration files into an OperationTable.  A single
    Lua interpreter is shared by base.lua and the user's config.lua so
    the user's file can call helpers defined in the base file.
    '''
    def __init__(self, table, directory=None, namespace=None):
        self.table = table
        self.directory = directory or config_dir()
        # Extra names visible to config.py
        self.namespace = namespace or {}
        self.lua = None
        self.loaded = []

    def files(self, load_base=True, user=True):
        'The (language, path) pairs to load, in load order.'
        files = []
        if load_base:
            files.append((LUA, base_lua))
        if user:
            files.append((LUA, os.path.join(self.directory, lua_config)))
            files.append((PYTHON, os.path.join(self.directory, python_config)))
        return files

    def load_all(self, load_base=True, user=True):
        '''Load every configuration file that exists.  A failing file
        doesn't stop the others from loading; the errors are returned.
        Operations registered before a failure stay registered.
        '''
        errors = []
        for language, path in self.files(load_base, user):
            if not os.path.isfile(path):
                continue
            try:
                if language == LUA:
                    self.load_lua(path)
                else:
                    self.load_python(path)
            except ExtensionError as e:
                errors.append(str(e))
        return errors

    def reload(self, load_base=True, user=True):
        self.table.remove_source(LUA)
        self.table.remove_source(PYTHON)
        self.lua = None
        self.loaded = []
        return self.load_all(load_base, user)

    def read(self, path):
        try:
            with open(path) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ExtensionError("%s: %s" % (path, e))

    def lua_runtime(self):
        if self.lua is None:
            self.lua = LuaRuntime(unpack_returned_tuples=True)
        return self.lua

    def load_lua(self, path):
        source = self.read(path)
        lua = self.lua_runtime()
        registrar = Registrar(self.table, LUA, LuaFunction)
        lua.globals().register = registrar
        try:
            lua.execute(source)
        except (LuaError, CalcException) as e:
            raise ExtensionError("%s: %s" % (path, e))
        self.loaded.append(path)
        return registrar

    def load_python(self, path):
        source = self.read(path)
        registrar = Registrar(self.table, PYTHON, PythonFunction)
        namespace = dict(self.namespace)
        namespace.update({
            "__name__" : "rpncalc_config",
            "__file__" : path,
            "register" : registrar,
            "math"     : math,
            "mpmath"   : mpmath,
        })
        try:
            exec(compile(source, path, "exec"), namespace)
        except CalcException as e:
            raise ExtensionError("%s: %s" % (path, e))
        except Exception as e:
            # Anything the user's code raised, including SyntaxError
            raise ExtensionError("%s: %s: %s" % (path, e.__class__.__name__, e))
        self.loaded.append(path)
        return registrar
