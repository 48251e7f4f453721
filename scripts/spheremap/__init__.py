"""spheremap — Convert a six-face cube map into a single spheremap image.

Each output pixel is mapped to a 3D direction with a parabolic projection,
the direction picks a cube face and face-local UV, and the face is point
sampled.  The result is written as a 32-bit BMP next to the input faces.

All maths runs in float64, so a pixel whose sample point lies very close to a
texel boundary can pick a different texel than a float32 implementation.

Usage:
    python scripts/spheremap <prefix> <extension> <output_size>
    python scripts/spheremap sky png 512 --face-map sky_faces.png

Requires: pip install numpy Pillow matplotlib
"""
