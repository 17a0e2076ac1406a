#!/usr/bin/env python3
"""
Generate an RSA Key Pair for Encrypted Forms

Creates a private key (kept by whoever decrypts submissions) and the
public key in two forms: a PEM file and the bare base64 body that goes
into a form's 'base64RsaPublicKey' attribute.

Usage:
    python scripts/gen_keypair.py --bits 2048 --output keys
"""

import argparse
import os
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa


def generate_keypair(key_size: int = 2048, output_dir: str = "keys"):
    """
    Generate an RSA key pair and save it.
    
    Args:
        key_size: RSA modulus size in bits
        output_dir: Directory to save the keys
    
    Returns:
        Tuple of (private_key, bare base64 public key)
    """
    os.makedirs(output_dir, exist_ok=True)
    
    print(f"[*] Generating RSA private key ({key_size} bits)...")
    private_key = rsa.generate_private_key(
        public_exponent=65537,
        key_size=key_size,
    )
    
    key_path = os.path.join(output_dir, "private_key.pem")
    with open(key_path, "wb") as f:
        f.write(
            private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )
    print(f"[+] Private key saved to: {key_path}")
    
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    pem_path = os.path.join(output_dir, "public_key.pem")
    with open(pem_path, "wb") as f:
        f.write(public_pem)
    print(f"[+] Public key saved to: {pem_path}")
    
    # Form attribute value: PEM body without armour or line breaks
    body = "".join(
        line for line in public_pem.decode("ascii").splitlines()
        if not line.startswith("-----")
    )
    body_path = os.path.join(output_dir, "public_key.b64")
    with open(body_path, "w") as f:
        f.write(body + "\n")
    print(f"[+] Form public key saved to: {body_path}")
    
    print(f"\n[✓] Key pair created successfully!")
    return private_key, body


def main():
    parser = argparse.ArgumentParser(
        description="Generate an RSA key pair for encrypted form submissions"
    )
    parser.add_argument(
        "--bits",
        type=int,
        default=2048,
        help="RSA key size in bits (default: 2048)"
    )
    parser.add_argument(
        "--output",
        default="keys",
        help="Output directory for keys (default: keys)"
    )
    
    args = parser.parse_args()
    
    generate_keypair(key_size=args.bits, output_dir=args.output)


if __name__ == "__main__":
    main()
