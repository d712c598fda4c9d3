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

from .debug import fln

# Exceptions for the Stack class
class CalcException(Exception):          pass
class StackIsEmpty(CalcException):       pass
class NotEnoughArguments(CalcException): pass
class FunctionFailed(CalcException):     pass

class Stack(object):
    '''This object provides a stack and is intended to be used as an RPN
    calculator.  The minimum functionality is present, however.  The
    calculator owns the text input, the operation table and the display;
    the stack only holds values.

    Besides providing the stack and the usual stack functions, the only
    major functionality is the machinery to apply an n-ary function to
    the elements on the top of the stack.  The function receives the
    arguments deepest first, so for 'y x -' it is called as f(y, x), as
    is done on HP RPN calculators.  It may return a single value, a
    sequence of any length (all of which are pushed in order) or None.
    None entries inside a sequence are skipped.

    If the function raises, the stack is left exactly as it was.
    '''
    def __init__(self):
        '''The stack is implemented as a list; the top of the stack is the
        last element.
        '''
        self.stack = []

    def apply(self, function, n, name=None):
        if n > len(self.stack):
            raise NotEnoughArguments("%s'%s' needs %d value%s (stack has %d)" %
                (fln(), name or getattr(function, "__name__", "?"), n,
                 "" if n == 1 else "s", len(self.stack)))
        args = self.stack[len(self.stack) - n:]
        try:
            result = function(*args)
        except CalcException:
            raise
        except Exception as e:
            raise FunctionFailed("%s%s: %s" % (fln(), name or "function", e))
        if n:
            del self.stack[-n:]
        if result is None:
            return
        if isinstance(result, (list, tuple)):
            self.stack.extend(v for v in result if v is not None)
        else:
            self.stack.append(result)

    def swap(self):
        if len(self.stack) < 2:
            raise NotEnoughArguments("%s'swap' needs 2 values (stack has %d)" %
                (fln(), len(self.stack)))
        self.stack[-1], self.stack[-2] = self.stack[-2], self.stack[-1]

    def size(self):
        return len(self.stack)

    def __len__(self):
        return len(self.stack)

    def push(self, x):
        self.stack.append(x)

    def pop(self):
        if self.stack:
            return self.stack.pop(-1)
        else:
            raise StackIsEmpty("%s" % fln() + "Stack is empty (tried to pop)")

    def dup(self):
        if not self.stack:
            raise StackIsEmpty("%s" % fln() + "Stack is empty (tried to dup)")
        self.stack.append(self.stack[-1])

    def drop(self):
        self.pop()

    def roll(self):
        '''Move the top of the stack to the bottom.'''
        if self.stack:
            if len(self.stack) == 1:
                return
            self.stack = [self.stack.pop(-1)] + self.stack
        else:
            raise StackIsEmpty("%s" % fln() + "Stack is empty (tried to roll)")

    def clear_stack(self):
        self.stack = []

    def values(self):
        'Copy of the stack contents, bottom first.'
        return self.stack[:]

    def __setitem__(self, i, value):
        # i = 0 is top of stack
        n = len(self.stack)
        if n == 0:
            raise StackIsEmpty("%s" % fln() + "Stack is empty (tried to set item %d)" % i)
        if i < 0 or i >= n:
            raise IndexError("%s" % fln() + "Stack size is %d" % n)
        self.stack[n - 1 - i] = value

    def __getitem__(self, i):
        # i = 0 is top of stack
        n = len(self.stack)
        if n == 0:
            raise StackIsEmpty("%s" % fln() + "Stack is empty (tried to get item %d)" % i)
        if i < 0 or i >= n:
            raise IndexError("%s" % fln() + "Stack size is smaller than %d" % (i+1))
        return self.stack[n - 1 - i]

    def _string(self, func, size=0):
        '''Used to pretty print the stack.  func should be a function that
        will format a number.  If size is nonzero, only display that many
        items.  Note:  we make a copy of the stack so we can't possibly
        mess it up.
        '''
        s, fmt = self.stack[:], "%2d: %s"
        if not size or size > len(s):
            size = max(1, len(s))
        s = s[len(s) - size:]
        size = len(s) - 1
        m = []
        for i in range(len(s)):
            m.append(fmt % (size - i, func(s[i])))
        return '\n'.join(m)

    def __str__(self):
        s = ""
        if self.stack: s = self._string(str)
        return s

    def __repr__(self):
        s = ""
        if self.stack: s = self._string(repr)
        return s
