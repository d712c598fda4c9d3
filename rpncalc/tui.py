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
Terminal interface for the calculator.

The window holds two boxes:  the stack fills everything but the last
three rows, with the newest value at the bottom, and a one line text
box underneath it where input is typed.  Keys are turned into events:

    Ctrl-D          quit
    Ctrl-W          clear the text box
    Ctrl-L          reset the calculator
    Enter           submit the text box (an empty one repeats the
                    previous operation)
    Backspace       delete the last character
    Up/Down         walk through the input history

If no key arrives within cfg["tick_ms"] milliseconds a tick event is
generated so the screen is redrawn after a resize.
'''

import curses
from curses.textpad import rectangle

from .calculator import status_quit
from .display import Display

# Event kinds
INPUT           = "input"
SUBMIT          = "submit"
TICK            = "tick"
QUIT            = "quit"
RESET           = "reset"
CLEAR_TEXT_BOX  = "clear"
HISTORY_UP      = "up"
HISTORY_DOWN    = "down"

BACKSPACE = "backspace"

def ctrl(c):
    return chr(ord(c) & 0x1f)

control_keys = {
    ctrl("d") : QUIT,
    ctrl("w") : CLEAR_TEXT_BOX,
    ctrl("l") : RESET,
    "\n"      : SUBMIT,
    "\r"      : SUBMIT,
}

special_keys = {
    curses.KEY_ENTER  : (SUBMIT, None),
    curses.KEY_UP     : (HISTORY_UP, None),
    curses.KEY_DOWN   : (HISTORY_DOWN, None),
    curses.KEY_RESIZE : (TICK, None),
    curses.KEY_BACKSPACE : (INPUT, BACKSPACE),
}

def key_to_event(key):
    '''Map what window.get_wch() returned to an (event, key) pair.  key
    is a str for characters and an int for special keys.
    '''
    if isinstance(key, int):
        return special_keys.get(key, (INPUT, key))
    if key in control_keys:
        return (control_keys[key], None)
    if key in ("\x7f", "\x08"):
        return (INPUT, BACKSPACE)
    return (INPUT, key)

class StatusDisplay(Display):
    '''Keeps messages for the screen instead of writing them to stdout,
    which curses owns.  lines holds the messages since the last clear();
    is_error is True if the last one was an error.
    '''
    def __init__(self):
        Display.__init__(self)
        self.lines = []
        self.is_error = False

    def msg(self, string, suppress_nl=False):
        self.lines.extend(string.splitlines() or [""])
        self.is_error = False
        self.log(string, suppress_nl)

    def err(self, string, suppress_nl=False):
        self.lines.extend(string.splitlines() or [""])
        self.is_error = True
        self.log(string, suppress_nl)

    def clear(self):
        self.lines = []
        self.is_error = False

    def status(self):
        'The line shown in the text box border.'
        if self.lines:
            return self.lines[-1]
        return ""

class App(object):
    def __init__(self, calculator):
        self.calc = calculator
        self.display = calculator.display
        self.history_index = None    # None when not browsing history
        self.saved_text = ""         # Text box contents before browsing

    def handle(self, event):
        '''Apply one event to the calculator.  Returns False when the
        program should end.
        '''
        kind, key = event
        calc = self.calc
        if kind == QUIT:
            return False
        elif kind == INPUT:
            if key == BACKSPACE:
                calc.text_box = calc.text_box[:-1]
            elif isinstance(key, str) and key.isprintable():
                calc.text_box += key
            else:
                return True
            self.clear_messages()
            self.history_index = None
        elif kind == SUBMIT:
            self.clear_messages()
            self.history_index = None
            if calc.submit() == status_quit:
                return False
        elif kind == RESET:
            self.clear_messages()
            self.history_index = None
            calc.reset()
        elif kind == CLEAR_TEXT_BOX:
            self.history_index = None
            calc.clear_text_box()
        elif kind == HISTORY_UP:
            self.history_up()
        elif kind == HISTORY_DOWN:
            self.history_down()
        return True

    def clear_messages(self):
        if isinstance(self.display, StatusDisplay):
            self.display.clear()

    def history_up(self):
        history = self.calc.history
        if not history:
            return
        if self.history_index is None:
            self.saved_text = self.calc.text_box
            self.history_index = len(history) - 1
        elif self.history_index > 0:
            self.history_index -= 1
        self.calc.text_box = history[self.history_index]

    def history_down(self):
        if self.history_index is None:
            return
        self.history_index += 1
        if self.history_index >= len(self.calc.history):
            self.history_index = None
            self.calc.text_box = self.saved_text
        else:
            self.calc.text_box = self.calc.history[self.history_index]

    def stack_lines(self, rows):
        '''The lines shown in the stack box:  the last rows values, so the
        top of the stack is always visible.  Messages with more than one
        line (help, cfg) take the box over until the next key.
        '''
        if rows < 1:
            return []
        display = self.display
        if isinstance(display, StatusDisplay) and len(display.lines) > 1:
            lines = display.lines
        else:
            lines = [self.calc.Format(x) for x in self.calc.stack.values()]
        return lines[-rows:]

    def status(self):
        if isinstance(self.display, StatusDisplay) and len(self.display.lines) == 1:
            return self.display.status()
        return ""

    #---------------------------------------------------------------------------
    # curses

    def draw(self, window):
        height, width = window.getmaxyx()
        window.erase()
        if height < 5 or width < 8:
            window.addnstr(0, 0, self.calc.text_box + "_", max(1, width - 1))
            window.refresh()
            return
        # Box corners stay off the last column; curses can't write the
        # bottom right cell of a window.
        right = width - 2
        stack_bottom = height - 4
        rectangle(window, 0, 0, stack_bottom, right)
        for i, line in enumerate(self.stack_lines(stack_bottom - 1)):
            window.addnstr(1 + i, 2, line, right - 3)
        rectangle(window, height - 3, 0, height - 1, right)
        window.addnstr(height - 2, 2, self.calc.text_box + "_", right - 3)
        status = self.status()
        if status:
            attr = curses.A_BOLD if self.display.is_error else curses.A_NORMAL
            window.addnstr(height - 3, 2, " %s " % status, right - 3, attr)
        window.refresh()

    def read_event(self, window):
        try:
            key = window.get_wch()
        except curses.error:
            # Timed out
            return (TICK, None)
        return key_to_event(key)

    def main(self, window):
        try:
            curses.curs_set(0)
        except curses.error:
            pass    # Terminal can't hide the cursor
        window.keypad(True)
        window.timeout(self.calc.cfg["tick_ms"])
        while True:
            self.draw(window)
            if not self.handle(self.read_event(window)):
                break

def run(calculator):
    '''Run the terminal interface until the user quits.  curses.wrapper
    puts the terminal back the way it was, even after an exception.
    '''
    calculator.LoadHistory()
    try:
        curses.wrapper(App(calculator).main)
    except KeyboardInterrupt:
        pass
    finally:
        calculator.SaveHistory()
    return 0
