"""Address space layout of the 24-bit machine.

Memory map::

    000000-007FFF  Standard library
    008000-00FFFF  Core ROM
    010000-7FFFFF  ROM bank
    800000-EFFFFF  Work RAM
    F00000-F7FFFF  IO
    F80000-F9FFFF  Reserved
    FA0000-FAFFFF  Audio
    FB0000-FBE0FF  Framebuffer
    FBE100-FBFD1F  Resolution attributes
    FBFD20-FBFFEF  Custom palette
    FBFFF0-FBFFFF  System palette index
    FC0000-FC11FF  Standard font
    FC1200-FC121F  Byte block transfer
    FD0000-FEFFFF  Reserved
    FF0000-FFFFFF  Initial stack (64 KiB)
"""

BITS = 24
SIZE = 2**BITS
MASK = SIZE - 1

AUDIO = 0xFA0000
AUDIO0_VOLUME = 0xFA0000
AUDIO0_DUTY = 0xFA0001
AUDIO0_PITCH = 0xFA0002
AUDIO1_VOLUME = 0xFA0010
AUDIO1_DUTY = 0xFA0011
AUDIO1_PITCH = 0xFA0012
AUDIO2_VOLUME = 0xFA0020
AUDIO2_DUTY = 0xFA0021
AUDIO2_PITCH = 0xFA0022
AUDIO3_VOLUME = 0xFA0030
AUDIO3_DUTY = 0xFA0031
AUDIO3_PITCH = 0xFA0032
PCM_VOLUME = 0xFA0040
PCM_DUTY = 0xFA0041
PCM_FREQ = 0xFA0042
PCM_ENABLE = 0xFA0044

FRAMEBUFFER = 0xFB0000
RESOLUTION = 0xFBE100
PALETTE = 0xFBFD20
SYSTEM_PALETTE = 0xFBFFF0
FONT = 0xFC0000

BLOCK_TRANSFER = 0xFC1200
BLOCK_SRC_MOD = 0xFC1200
BLOCK_SRC_WIDTH = 0xFC1202  # flip_x
BLOCK_SRC_HEIGHT = 0xFC1204  # flip_y
BLOCK_SRC_ADDRESS = 0xFC1206
BLOCK_DST_MOD = 0xFC1210
BLOCK_DST_WIDTH = 0xFC1212  # rotation
BLOCK_DST_HEIGHT = 0xFC1214  # mask on
BLOCK_DST_ADDRESS = 0xFC1216  # a write here triggers the block transfer
BLIT_MODE = 0xF90020
BLOCK_REMAP = 0xF90200

STACK = 0xFF0000