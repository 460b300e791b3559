"""Text of the built-in help source shown by ``h``."""

from __future__ import annotations

HELP_TITLE = "HELP -- Press SPACE for more, or q when done"

HELP_TEXT = """\
\x1b[1mSUMMARY OF LAZYLESS COMMANDS\x1b[0m

  Commands marked with * may be preceded by a number, N.
  Notes in parentheses indicate the behavior if N is given.

  h  H                 Display this help.
  q  :q  Q  :Q  ZZ     Exit.

\x1b[1mMOVING\x1b[0m

  e  ^E  j  ^N  CR  *  Forward  one line   (or N lines).
  y  ^Y  k  ^K  ^P  *  Backward one line   (or N lines).
  f  ^F  ^V  SPACE  *  Forward  one window (or N lines).
  b  ^B  ESC-v      *  Backward one window (or N lines).
  z                 *  Forward  one window (and set window to N).
  w                 *  Backward one window (and set window to N).
  ESC-SPACE         *  Forward  one window, but don't stop at end-of-file.
  d  ^D             *  Forward  one half-window (and set half-window to N).
  u  ^U             *  Backward one half-window (and set half-window to N).
  ESC-)  RightArrow    Right one half screen width.
  ESC-(  LeftArrow     Left  one half screen width.
  r  ^R  ^L            Repaint screen.
  R                    Repaint screen, discarding the status message.

\x1b[1mSEARCHING\x1b[0m

  /pattern          *  Search forward for (N-th) matching line.
  ?pattern          *  Search backward for (N-th) matching line.
  n                 *  Repeat previous search (for N-th occurrence).
  N                 *  Repeat previous search in reverse direction.
  ESC-n             *  Repeat previous search, spanning files.
  ESC-N             *  Repeat previous search, reverse dir. & spanning files.
  ESC-u                Undo (toggle) search highlighting.
  &pattern          *  Display only matching lines.

  While typing a pattern, Up/Down browse previously entered patterns.

\x1b[1mJUMPING\x1b[0m

  g  <  ESC-<       *  Go to first line in file (or line N).
  G  >  ESC->       *  Go to last line in file (or line N).

\x1b[1mCHANGING FILES\x1b[0m

  :e  ^X^V             Examine a new file (glob patterns allowed).
  :n                *  Examine the (N-th) next file from the command line.
  :p                *  Examine the (N-th) previous file from the command line.
  :x                *  Examine the first (or N-th) file from the command line.
  :d                   Delete the current file from the command line list.
  =  ^G  :f            Print current file name.

\x1b[1mOPTIONS\x1b[0m

  Most options may be changed while viewing a file with "-":

  -e  --quit-at-eof    Quit at second end of file.
  -E  --QUIT-AT-EOF    Quit at first end of file.
  -i  --ignore-case    Ignore case in searches that do not contain uppercase.
  -I  --IGNORE-CASE    Ignore case in all searches.
  -N  --LINE-NUMBERS   Display line numbers.
  -q  --quiet          Ring the bell for errors but not at eof/bof.
  -Q  --QUIET          Never ring the bell.
  -S  --chop-long-lines
                       Chop (truncate) long lines rather than wrapping.

\x1b[1mLINE EDITING\x1b[0m

  RightArrow   ESC-l   Move cursor right one character.
  LeftArrow    ESC-h   Move cursor left one character.
  ESC-w                Move cursor right one word.
  ESC-b                Move cursor left one word.
  HOME         ESC-0   Move cursor to start of line.
  END          ESC-$   Move cursor to end of line.
  BACKSPACE            Delete char to left of cursor.
  ESC-x                Delete char under cursor.
  ESC-X                Delete word under cursor.
  ^U                   Delete entire line.
  UpArrow      ESC-k   Retrieve previous command line.
  DownArrow    ESC-j   Retrieve next command line.
"""
