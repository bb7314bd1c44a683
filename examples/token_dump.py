#!/usr/bin/env python3
"""
Monster Tokenizer Demo
======================

This script demonstrates how to use the Monster tokenizer to:
1. Tokenize a whole script file
2. Group tokens into lines using the starts_line flag
3. Tokenize console input one line at a time
4. Report lexical errors

Usage:
    source .venv/bin/activate
    python examples/token_dump.py
"""

from pathlib import Path

from monster import LexError, Tokenizer, TokenizerOptions, tokenize_file


def main():
    script = Path(__file__).with_name("hello.mn")

    # ==========================================================================
    # 1. Tokenize a file
    # ==========================================================================
    # The result always ends with a single EOF token.

    print(f"Tokenizing {script.name}...")
    tokens = tokenize_file(script)
    print(f"  {len(tokens)} tokens, last one: {tokens[-1]!r}")

    # ==========================================================================
    # 2. Rebuild the statement lines
    # ==========================================================================
    # starts_line marks the first token read from each source line, and
    # every '}' token.

    print("\nLines as the parser sees them:")
    line = []
    for token in tokens:
        if token.starts_line and line:
            print("  " + " ".join(line))
            line = []
        line.append(str(token))
    if line:
        print("  " + " ".join(line))

    # ==========================================================================
    # 3. Console mode
    # ==========================================================================
    # Comments stay open from one line to the next.

    print("\nConsole input:")
    tokenizer = Tokenizer(options=TokenizerOptions(case_insensitive_comparison_operators=False))
    for text in ['name !=i= "x" /* start', "still comment */ x += 2"]:
        tokenizer.set_line(text)
        while (token := tokenizer.next_from_line()) is not None:
            print(f"  {token.type.name:<14} {token.text}")

    # ==========================================================================
    # 4. Errors
    # ==========================================================================
    # Errors carry the file and line in file mode, and no location in
    # console mode.

    print("\nError reporting:")
    tokenizer = Tokenizer()
    tokenizer.set_line('print("oops);')
    try:
        while tokenizer.next_from_line() is not None:
            pass
    except LexError as e:
        print(f"  {e}")


if __name__ == "__main__":
    main()
