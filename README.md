# twopass

A two-pass assembler for a small 24-bit teaching machine. It expands macros,
builds a symbol table, encodes instructions and data, and writes object,
entry and extern files.

## Installing

```
pip install .
```

## Usage

Give the base names of source files, without the `.as` extension:

```
twopass prog other
```

The files are assembled one after another, starting with the last name given.
For each name `prog`, the assembler reads `prog.as` and writes:

- `prog.am`: the source with every macro definition removed and every macro
  call replaced by the macro's body
- `prog.obj`: a first line with the instruction and data word counts, then
  one line per word, giving a six-digit decimal address and a six-digit hex
  word; instructions start at address 100 and data follows them
- `prog.ent`: the symbols declared with `.entry` and their addresses
  (written only when there are any)
- `prog.ext`: each use of an `.extern` symbol and the address where it is
  used (written even when there are none)

Errors are printed to standard output with the file name and line number.
When macro expansion finds an error, no `.am` file is written. When a later
stage finds one, no object, entry or extern file is written for that file.
A summary line tells whether each file assembled.

## Source language

```
; a comment
mcro twice
    inc r1
    inc r1
mcroend

.extern OUT
.entry MAIN
MAIN:   mov #5, r1
        twice
        cmp r1, COUNT
        bne &MAIN
        jsr OUT
        stop
COUNT:  .data 7, -3
MSG:    .string "hi"
```

- Registers are named `r1` to `r8`.
- Operands are immediate (`#5`), direct (`LABEL`), relative (`&LABEL`,
  for `jmp`, `bne` and `jsr`) or register (`r3`).
- Operations: `mov cmp add sub lea clr not inc dec jmp bne jsr red prn rts stop`.
- Directives: `.data`, `.string`, `.entry`, `.extern`.
- Macros are defined between `mcro NAME` and `mcroend`; a macro name follows
  the same rules as a label and may not be an operation or register name.
- Lines are at most 81 characters, labels at most 31.

## From Python

```python
import sys
from twopass.cli import assemble
from twopass.errors import Reporter

ok = assemble("prog", Reporter(sys.stdout))
```

`assemble` returns `True` when the output files were written.
`twopass.cli.main(argv)` runs the command with an explicit argument list.

The stages can also be used on their own:

- `twopass.preassembler.expand_macros(text, file_name, reporter)` returns the
  expanded source text, or `None` if an error was reported.
- `twopass.first_scan.first_scan(input_file, orig_file, reporter)` returns a
  `FirstPassResult` with the instruction and data memory, the `SymbolTable`
  and the final counters.
- `twopass.second_scan.second_scan(file_name, input_name, result, reporter)`
  resolves symbols and writes the output files.

`twopass.errors.Reporter` prints each error and counts them in its `count`
attribute; `twopass.errors.message(code)` gives the text for an `ErrorCode`.