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


import re
from mpmath import mpf, mpc, inf, nan, nstr

# SI suffixes, letter to exponent.  'u' stands in for micro.
suffixes_ln = { "y":-24, "z":-21, "a":-18, "f":-15, "p":-12, "n":-9,
                "u":-6,  "m":-3,  "k":3,   "M":6,   "G":9,   "T":12,
                "P":15,  "E":18,  "Z":21,  "Y":24}

# Number recognition regular expressions
R = r'''
    ^
    ([+-])?                     # Optional leading sign
    (\d+\.\d*|\.\d+|\d+)        # Required digits and opt. decimal point
    (e[+-]?\d+)?                # Optional exponent
    $
'''
real = re.compile(R, re.X | re.I)

# Integers in another base:  0x1f, -0o17, 0b101
B = r'''
    ^
    ([+-])?                     # Optional leading sign
    0([xob])                    # Base prefix
    ([0-9a-f]+)                 # Digits; checked against the base by int()
    $
'''
based = re.compile(B, re.X | re.I)

bases = {"x" : 16, "o" : 8, "b" : 2}

specials = {
    "inf"  : inf,
    "+inf" : inf,
    "-inf" : -inf,
    "nan"  : nan,
}

class Number(object):
    '''Used to generate a number object from a string.  Returns None if
    the string isn't a number, so a caller can go on to try it as an
    operation name.
    '''
    def __call__(self, s):
        s = s.strip()
        if not s:
            return None
        if s.lower() in specials:
            return specials[s.lower()]
        x = self.b(s)
        if x is not None:
            return x
        x = self.r(s)
        if x is not None:
            return x
        # An SI suffix scales the real in front of it:  2.2k, 47u
        if len(s) > 1 and s[-1] in suffixes_ln:
            x = self.r(s[:-1])
            if x is not None:
                return x*mpf("1e%d" % suffixes_ln[s[-1]])
        return None

    def r(self, s):
        if real.match(s):
            return mpf(s)
        return None

    def b(self, s):
        mo = based.match(s)
        if not mo:
            return None
        sign, base, digits = mo.groups()
        try:
            value = int(digits, bases[base.lower()])
        except ValueError:
            return None
        if sign == "-":
            value = -value
        return mpf(value)

def Format(x, digits=12):
    '''Convert a stack value to the string shown to the user.  Integral
    reals are shown without a trailing '.0'.
    '''
    if isinstance(x, mpc):
        if x.imag == 0:
            return Format(x.real, digits)
        sign = "-" if x.imag < 0 else "+"
        return "(%s %s %sj)" % (Format(x.real, digits), sign,
                                Format(abs(x.imag), digits))
    if isinstance(x, mpf):
        s = nstr(x, digits)
        if s.endswith(".0"):
            s = s[:-2]
        return s
    return str(x)
