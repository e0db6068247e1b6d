#!/usr/bin/env python
import time
import os
from tlock.objects import DST_G1, DST_G2
from tlock.pairing import default_engine

if __name__ == "__main__":
    engine = default_engine()

    # random groups elements
    a_scalar = int.from_bytes(os.urandom(32), "big") % engine.order
    b_scalar = int.from_bytes(os.urandom(32), "big") % engine.order
    a = engine.mul_g1(engine.g1_generator(), a_scalar)
    b = engine.mul_g2(engine.g2_generator(), b_scalar)

    # more random scalars
    scalar1 = int.from_bytes(os.urandom(32), "big") % engine.order
    scalar2 = int.from_bytes(os.urandom(32), "big") % engine.order

    exp_g1_time = 0.0
    exp_g2_time = 0.0
    pairing_time = 0.0
    hash_g1_time = 0.0
    hash_g2_time = 0.0
    g1_serialize_time = 0.0
    g1_deserialize_time = 0.0
    g2_serialize_time = 0.0
    g2_deserialize_time = 0.0
    gt_serialize_time = 0.0

    iters = 10
    print("averaging over {} iterations".format(iters), end="", flush=True)
    for i in range(iters):
        # scalar multiplications
        start = time.time()
        a_exp = engine.mul_g1(a, scalar1)
        exp_g1_time += time.time()-start

        start = time.time()
        b_exp = engine.mul_g2(b, scalar2)
        exp_g2_time += time.time()-start

        # pairing
        start = time.time()
        c = engine.pairing(a, b)
        pairing_time += time.time()-start

        # hash to curve
        msg = os.urandom(32)
        start = time.time()
        engine.hash_to_g1(msg, DST_G1)
        hash_g1_time += time.time()-start

        start = time.time()
        engine.hash_to_g2(msg, DST_G2)
        hash_g2_time += time.time()-start

        # --- serialization ---
        # G1
        start = time.time()
        a_bytes = engine.compress_g1(a_exp)
        g1_serialize_time += time.time()-start

        start = time.time()
        engine.decompress_g1(a_bytes)
        g1_deserialize_time += time.time()-start

        # G2
        start = time.time()
        b_bytes = engine.compress_g2(b_exp)
        g2_serialize_time += time.time()-start

        start = time.time()
        engine.decompress_g2(b_bytes)
        g2_deserialize_time += time.time()-start

        # GT
        start = time.time()
        c_bytes = engine.gt_to_bytes(c)
        gt_serialize_time += time.time()-start

        print(i if i>0 and i%10==0 else ".", end="", flush=True)

    print("\n")
    print("mul in G1\t{}".format(exp_g1_time / iters))
    print("mul in G2\t{}".format(exp_g2_time / iters))
    print()
    print("pairing\t\t{}".format(pairing_time / iters))
    print()
    print("hash to G1\t{}".format(hash_g1_time / iters))
    print("hash to G2\t{}".format(hash_g2_time / iters))
    print()
    print("serialize in G1\t\t{}".format(g1_serialize_time / iters))
    print("deserialize in G1\t{}".format(g1_deserialize_time / iters))
    print("serialize in G2\t\t{}".format(g2_serialize_time / iters))
    print("deserialize in G2\t{}".format(g2_deserialize_time / iters))
    print("serialize in GT\t\t{}".format(gt_serialize_time / iters))

    # sizes
    print()
    print("G1 bytes:\t{}".format(len(a_bytes)))
    print("G2 bytes:\t{}".format(len(b_bytes)))
    print("GT bytes:\t{}".format(len(c_bytes)))
