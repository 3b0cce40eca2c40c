"""Lexer for ASE Script.

The lexer feeds the source one character at a time into a small finite-state
machine. Each state accumulates a lexeme until a delimiter is seen, at which
point the lexeme is flushed as a :class:`Token` of the matching type.

States are ``IDLE``, ``IDENTIFIER``, ``NUMBER`` and ``OPERATOR``. Any
character that is not whitespace, a letter or a digit is an operator
character, so punctuation such as ``(`` and ``,`` is lexed the same way as
``+`` and consecutive operator characters form a single lexeme (``==``,
``!=``). A synthetic newline is fed after the last character so the final
lexeme is always flushed and the token list always ends with ``NEW_LINE``.

The lexer performs no validation and cannot fail.


File: lexer.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass, field
from enum import Enum


KEYWORDS = frozenset({"If", "While", "Method", "Endif", "Endloop", "Endmethod"})


class TokenType(str, Enum):
    """
    The type of a lexeme.
    """
    OPERATOR = "OPERATOR"
    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"
    NEW_LINE = "NEW_LINE"
    NUMBER = "NUMBER"
    # Reserved: the state machine has no comment syntax.
    COMMENT = "COMMENT"


class State(Enum):
    """
    States of the :class:`LexicalStateMachine`.
    """
    IDLE = "idle"
    IDENTIFIER = "identifier"
    NUMBER = "number"
    OPERATOR = "operator"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token with a type and raw value.
    """
    type: TokenType
    value: str

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type.value}, {self.value!r})"


def is_newline(char: str) -> bool:
    return char == "\n"


def is_whitespace(char: str) -> bool:
    return char.isspace()


def is_letter(char: str) -> bool:
    return char.isalpha()


def is_digit(char: str) -> bool:
    return char.isdecimal()


@dataclass
class LexicalStateMachine:
    """
    State machine that compiles characters into tokens.
    """
    state: State = State.IDLE
    lexeme: list[str] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)

    def read(self, char: str) -> None:
        """
        Feed a single character into the machine.

        Parameters:
            char (str): The character to process.
        """
        match self.state:
            case State.IDLE:
                self._idle_read(char)
            case State.IDENTIFIER:
                self._identifier_read(char)
            case State.NUMBER:
                self._number_read(char)
            case State.OPERATOR:
                self._operator_read(char)

    def _idle_read(self, char: str) -> None:
        if is_newline(char):
            self._push_newline()
        elif is_whitespace(char):
            pass
        elif is_letter(char):
            self._start(State.IDENTIFIER, char)
        elif is_digit(char):
            self._start(State.NUMBER, char)
        else:
            self._start(State.OPERATOR, char)

    def _identifier_read(self, char: str) -> None:
        if is_letter(char) or is_digit(char):
            self.lexeme.append(char)
        else:
            self._delimit(char)

    def _number_read(self, char: str) -> None:
        if is_digit(char):
            self.lexeme.append(char)
        elif is_letter(char):
            # Numbers cannot contain letters
            self._flush()
            self._start(State.IDENTIFIER, char)
        else:
            self._delimit(char)

    def _operator_read(self, char: str) -> None:
        if is_whitespace(char) or is_letter(char) or is_digit(char):
            self._delimit(char)
        else:
            self.lexeme.append(char)

    def _delimit(self, char: str) -> None:
        """
        Flush the current lexeme and hand ``char`` to the idle state.
        """
        self._flush()
        self.state = State.IDLE
        self._idle_read(char)

    def _start(self, state: State, char: str) -> None:
        self.state = state
        self.lexeme.append(char)

    def _flush(self) -> None:
        """
        Push the accumulated lexeme as a token of the current state's type.
        """
        value = "".join(self.lexeme)
        self.lexeme.clear()
        if not value:
            return
        match self.state:
            case State.IDENTIFIER:
                token_type = TokenType.KEYWORD if value in KEYWORDS else TokenType.IDENTIFIER
            case State.NUMBER:
                token_type = TokenType.NUMBER
            case State.OPERATOR:
                token_type = TokenType.OPERATOR
            case _:
                return
        self.tokens.append(Token(token_type, value))

    def _push_newline(self) -> None:
        self.tokens.append(Token(TokenType.NEW_LINE, "\n"))


class Lexer:
    """
    Performs lexical analysis on a script.
    """

    def lex(self, script: str) -> list[Token]:
        """
        Convert a script into a list of tokens.

        Each call runs on a fresh state machine, so lexing the same text twice
        yields identical token lists.

        Parameters:
            script (str): The source code to tokenize.

        Returns:
            list[Token]: The tokens, always terminated by a ``NEW_LINE``.
        """
        machine = LexicalStateMachine()
        for char in script:
            machine.read(char)
        # end of file
        machine.read("\n")
        return machine.tokens


def tokenize(code: str) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.

    Returns:
        list[Token]: A list of Token instances.
    """
    return Lexer().lex(code)
