import logging
import random

from convcode.fec.code import ConvolutionalCode
from convcode.fec.fsa import format_fsa
from convcode.utils.bitops import bits_to_str


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    code = ConvolutionalCode(3, ["111", "110"])
    print(code)
    print(format_fsa(code.fsa))

    word = [1, 0, 1, 1]
    cw = code.encode(word)
    print(f"encode {bits_to_str(word)} -> {bits_to_str(cw)}")

    rx = cw[:]
    rx[random.randrange(4)] ^= 1  # one flip in the first two blocks
    print(f"received  {bits_to_str(rx)}")
    print(f"decoded   {bits_to_str(code.decode(rx))}")
