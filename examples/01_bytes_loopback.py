import random

from convcode.stages.bit_fec.conv import Config, encoded_bit_length, rx, tx


if __name__ == "__main__":
    cfg = Config(constraint_length=7, generators=("1111001", "1011011"), tail=True)

    payload = b"hello over a noisy channel"
    enc = bytearray(tx(payload, cfg=cfg))

    nbits = encoded_bit_length(len(payload), cfg=cfg)
    rng = random.Random(7)
    for p in rng.sample(range(nbits), nbits // 100):
        enc[p // 8] ^= 1 << (7 - p % 8)

    out = rx(bytes(enc), cfg=cfg)
    print(f"{nbits} code bits, {nbits // 100} flipped, recovered={out == payload}")
    print(out)
