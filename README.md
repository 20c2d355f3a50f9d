# kittyasm

An assembler for kitty-assembly, the instruction set of the kitty24 virtual
machine: a 24-bit address space, sixteen registers (`r0` to `rF`) and sixteen
opcodes, each instruction encoded in three bytes.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Assembling source

```python
from kittyasm.assembler import assemble

rom = assemble("""
main:
    let r1, 10
.loop:
    sub r1, r1, r0, 1
    if r1, .loop
    data 2A FF
""")
print(rom.hex(" "))
```

`assemble` returns the ROM as `bytes`. Label references are resolved once
every statement has been assembled, so a label may be used before it is
defined. Local labels start with `.` and belong to the global label defined
before them: `.loop` above is stored as `main.loop`.

## The language

Source is read line by line. A line may start with a label definition
(`name:` or `.local:`) and may then hold one instruction. Comments start with
`;` or `//` and run to the end of the line. Operands are separated by commas.
Numbers are written as `$hex`, `%binary` or decimal.

| Mnemonic | Operation |
|---|---|
| `or`, `nor`, `and`, `xor`, `add`, `sub`, `mul`, `lt`, `slt` | register-register, `op rD[, rS][, rT][, imm8]` |
| `shl`, `shr`, `rotl`, `rotr`, `ashr` | shift, `op rD[, rS][, rT][, imm5]` |
| `let` | 16-bit immediate, `let rD, imm16` |
| `if` | relative branch, `if rC, label` or `if label` (tests `r0`) |
| `ld`, `st`, `pop`, `push` | memory access, `op rD[, rS][, imm10][, count]` |
| `data` | raw bytes in hexadecimal, `data 2A FF` |

Missing operands default to the destination register for the source, `r0`
for the target, and `0` for the immediate (`1` for `mul`). Memory
instructions default to a byte count of 3.

Immediates may also select bytes of a label's 24-bit address, byte 0 being
the highest: `add r1, r0, table[2]` takes one byte, and
`let r1, table[1:2]` takes two.

## Errors

Errors come back as exceptions:

- `kittyasm.parser.ParseError` when the source does not parse; its `line`
  attribute holds the line number;
- `kittyasm.references.LabelNotFoundError` when a referenced label has no
  definition;
- `kittyasm.references.ByteRangeError` when a label byte selection does not
  fit its immediate.

The last two are both `kittyasm.references.AssemblyError`.

## Working with the pieces

- `kittyasm.parser.parse_program(source)` turns source text into a
  `kittyasm.syntax.Program`, a sequence of `Label` and `Instruction` values.
  `kittyasm.parser.parse_register(text)` reads a register name.
- `kittyasm.assembler.Assembler().assemble_program(program)` encodes such a
  program into bytes.
- `kittyasm.references.resolve_reference(reference, label_addresses)` turns
  an `Absolute16`, `Absolute8` or `Relative16` reference into the ROM
  address to patch and the bytes to write there.
- `kittyasm.processor.Op` lists the sixteen opcodes, and
  `kittyasm.processor.decode_op(value)` maps a number back to its opcode.
- `kittyasm.memory` holds the machine's memory map: the audio registers, the
  framebuffer, the palettes, the font, the block transfer registers and the
  stack.
- `kittyasm.keys.key_value(key, layout)` gives the number that the machine
  reads for a `kittyasm.keys.KeyCode` under a `kittyasm.keys.KeyLayout`
  (`LEGACY` by default).

## What this package does not do

It assembles only. It has no virtual machine to run the ROM it produces, no
display or audio output, no compiler for a higher-level language, and no
command-line tool: it is used as a library.