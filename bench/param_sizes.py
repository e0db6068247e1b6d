#!/usr/bin/env python

"""Print the sizes of keys, signatures and ciphertexts for each beacon scheme.

Outputs:
- sizes of elements of G1, G2, GT, and scalars
- public key, round signature and ciphertext sizes per scheme and message length
"""

from tlock.objects import SCHEMES, Ciphertext
from tlock.codec import serialize
from tlock.pairing import default_engine

def print_element_sizes(engine):
    g1 = engine.g1_generator()
    g2 = engine.g2_generator()
    print("G1 element size:\t",len(engine.compress_g1(g1)))
    print("G2 element size:\t",len(engine.compress_g2(g2)))
    print("GT element size:\t",len(engine.gt_to_bytes(engine.pairing(g1, g2))))
    print("Scalar size:\t",(engine.order.bit_length()+7)//8)

def print_scheme_sizes(scheme, lengths):
    print("\n{}".format(scheme.scheme_id))
    print("public key:\t",scheme.public_key_length)
    print("signature:\t",scheme.signature_length)
    for n in lengths:
        ct = Ciphertext(bytes(scheme.u_length), bytes(n), bytes(n))
        print("ciphertext ({} B msg):\t{}".format(n, len(serialize(ct))))

if __name__ == "__main__":
    print_element_sizes(default_engine())

    # vote-sized, key-sized, and longer messages
    lengths = [8, 13, 32, 256]
    for scheme in SCHEMES.values():
        print_scheme_sizes(scheme, lengths)
