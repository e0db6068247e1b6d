#!/usr/bin/env python
from tlock import algos
from tlock.codec import serialize
from tlock.objects import SCHEMES
from tlock.pairing import default_engine
from tlock.utils import hash_round
import time
import argparse
import numpy as np
import csv
import os

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="run encryption/decryption benchmarks against a local beacon")
    parser.add_argument('-i','--iters',
        type=int,
        required=False,
        default=10,
        dest='iters',
        help='number of encrypt/decrypt pairs to time')
    parser.add_argument('-l','--length',
        type=int,
        required=False,
        default=32,
        dest='length',
        help='plaintext length in bytes')
    parser.add_argument('-s','--scheme',
        required=False,
        default='bls-unchained-g1-rfc9380',
        choices=sorted(SCHEMES),
        dest='scheme',
        help='beacon scheme')
    parser.add_argument('-u','--unchecked',
        action='store_true',
        required=False,
        default=False,
        dest='unchecked',
        help='decrypt without the integrity check')
    args = parser.parse_args()

    scheme = SCHEMES[args.scheme]
    engine = default_engine()

    ## Beacon ###
    setup_time = time.time()
    secret = int.from_bytes(os.urandom(32), "big") % engine.order
    if scheme.key_group == 2:
        pk = engine.compress_g2(engine.mul_g2(engine.g2_generator(), secret))
    else:
        pk = engine.compress_g1(engine.mul_g1(engine.g1_generator(), secret))
    setup_time = time.time()-setup_time
    print("Beacon key (s):\t", setup_time)
    print("--------------------------")

    prefix = 'bench{}_{}{}_'.format(args.length, args.scheme, 'u' if args.unchecked else '')
    f_enc = open(prefix+'enc.csv', 'w')
    f_dec = open(prefix+'dec.csv', 'w')
    writer_enc = csv.writer(f_enc)
    writer_dec = csv.writer(f_dec)
    writer_enc.writerow(['Sign', 'Enc'])
    writer_dec.writerow(['Dec'])
    times = {
        "Sign": [],
        "Enc": [],
        "Dec": [],
    }

    rounds = np.random.randint(1, 2**32, size=args.iters, dtype=np.int64).tolist()
    for i in range(args.iters):
        identity = hash_round(rounds[i])

        # the beacon's side: sign the round
        sign_time = time.time()
        if scheme.signature_group == 1:
            sig = engine.compress_g1(engine.mul_g1(engine.hash_to_g1(identity, scheme.dst), secret))
        else:
            sig = engine.compress_g2(engine.mul_g2(engine.hash_to_g2(identity, scheme.dst), secret))
        sign_time = time.time()-sign_time
        times["Sign"] += [sign_time]

        m = os.urandom(args.length)
        enc_time = time.time()
        ct = algos.encrypt(pk, identity, m, scheme=scheme, engine=engine)
        enc_time = time.time()-enc_time
        writer_enc.writerow([sign_time, enc_time])
        times["Enc"] += [enc_time]

        dec_time = time.time()
        m_prime = algos.decrypt(sig, ct, scheme=scheme, engine=engine, checked=not args.unchecked)
        dec_time = time.time()-dec_time
        writer_dec.writerow([dec_time])
        times["Dec"] += [dec_time]

        # ensure correctness
        assert(m == m_prime)
        print(i if i>0 and i%10==0 else ".", end="", flush=True)

    f_enc.close()
    f_dec.close()

    print("\n\nTimes (s)")
    print("--------------------------")
    for key in times.keys():
        print("{}:\tmean {:.4f}\tstd {:.4f}\t(of {})".format(key, np.mean(times[key]), np.std(times[key]), args.iters))
    print("\nCiphertext bytes:\t{}".format(len(serialize(ct))))
