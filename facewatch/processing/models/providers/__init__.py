"""
Model providers
---------------

- OnnxSessionProvider: loads .onnx files with onnxruntime.
"""

from .onnx_provider import OnnxSessionProvider, ORT_AVAILABLE

__all__ = ["OnnxSessionProvider", "ORT_AVAILABLE"]
