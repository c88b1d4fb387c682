"""nimdetect - AI-generated image detection action backed by NVIDIA NIM."""

__version__ = "0.1.0"
