#!/usr/bin/env python3
"""
Example: Mat and ParamGrid in Python

This example walks through construction, copying, conversion, norms and
connected components with the cv-mat bindings.

Requirements:
    pip install -e .

Run:
    python python_examples/mat_demo.py
"""

import math

import numpy as np

import cv_mat as cv


def main():
    print(f"=== cv-mat Demo (OpenCV {'.'.join(map(str, cv.version))}) ===\n")

    # 1. Construction
    print("1. Construction:")
    filled = cv.Mat(4, 3, cv.CV_8UC3, [255, 0, 0])
    print(f"   Filled mat: {filled}")

    from_values = cv.Mat([[0, 127, 255], [63, 195, 7]], cv.CV_8U)
    print(f"   From values: {from_values.get_data_as_array()}")

    merged = cv.Mat([from_values, from_values])
    print(f"   Merged channels: {merged.channels}")

    from_numpy = cv.Mat(np.eye(3, dtype=np.float32))
    print(f"   From numpy: type={from_numpy.type}")

    # 2. Copy with mask
    print("\n2. Masked copy:")
    mask = cv.Mat([[1, 0, 1], [0, 1, 0]], cv.CV_8U)
    print(f"   {from_values.copy(mask).get_data_as_array()}")

    # 3. Conversion and norms
    print("\n3. Conversion and norms:")
    as_float = from_values.convert_to(cv.CV_64F, alpha=1 / 255)
    print(f"   Converted type: {as_float.type}")

    mat = cv.Mat([[0, 2, 2], [math.sqrt(8), 4, math.sqrt(32)]], cv.CV_64F)
    print(f"   L2 norm: {mat.norm():.4f}")
    print(f"   L1 norm: {mat.norm(norm_type=cv.NormTypes.NORM_L1):.4f}")

    normalized = from_values.normalize(norm_type=cv.NormTypes.NORM_MINMAX, alpha=0, beta=100)
    print(f"   Normalized to [0, 100]: {normalized.get_data_as_array()}")

    # 4. Connected components
    print("\n4. Connected components:")
    blobs = cv.Mat([
        [0, 255, 255, 0, 0],
        [0, 255, 255, 0, 0],
        [0, 0, 0, 0, 255],
        [0, 0, 0, 0, 255],
    ], cv.CV_8U)
    result = blobs.connected_components_with_stats()
    print(f"   Found {result.num_labels - 1} components")
    for label in range(1, result.num_labels):
        area = result.stats.at(label, cv.ConnectedComponentsTypes.CC_STAT_AREA)
        cx, cy = result.centroids.at(label, 0), result.centroids.at(label, 1)
        print(f"   Label {label}: area={area}, centroid=({cx:.1f}, {cy:.1f})")

    # 5. Parameter grids
    print("\n5. Parameter grids:")
    print(f"   Custom: {cv.ParamGrid(0.1, 100, 10)}")
    print(f"   SVM gamma default: {cv.ParamGrid(cv.SvmParamTypes.GAMMA)}")

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
