import time
import cv2
import numpy as np
from PIL import Image, ImageFilter
import boxgauss


def benchmark_blur(size=(2048, 2048), sigma=5.0, iterations=10):
    print(f"Benchmarking Image Size: {size}, Sigma: {sigma}")

    # Prepare Data
    img_np = np.random.randint(0, 255, size + (4,), dtype=np.uint8)
    img_pil = Image.fromarray(img_np, mode="RGBA")

    # Warmup
    boxgauss.blur(img_np.copy(), sigma)
    cv2.GaussianBlur(img_np, (0, 0), sigma)
    img_pil.filter(ImageFilter.GaussianBlur(radius=sigma))

    # Benchmark boxgauss (in place, so blur a fresh copy each time)
    copies = [img_np.copy() for _ in range(iterations)]
    start = time.time()
    for img in copies:
        boxgauss.blur(img, sigma)
    boxgauss_time = (time.time() - start) / iterations
    print(f"boxgauss: {boxgauss_time:.4f} seconds")

    # Benchmark OpenCV
    start = time.time()
    for _ in range(iterations):
        cv2.GaussianBlur(img_np, (0, 0), sigma)
    opencv_time = (time.time() - start) / iterations
    print(f"OpenCV: {opencv_time:.4f} seconds")

    # Benchmark Pillow
    start = time.time()
    for _ in range(iterations):
        img_pil.filter(ImageFilter.GaussianBlur(radius=sigma))
    pillow_time = (time.time() - start) / iterations
    print(f"Pillow: {pillow_time:.4f} seconds")

    print("-" * 30)


def benchmark_radius_sweep(size=(1024, 1024), iterations=5):
    # The box approximation should cost the same for every sigma
    print(f"Benchmarking Radius Sweep - Image Size: {size}")

    img_np = np.random.randint(0, 255, size + (4,), dtype=np.uint8)

    for sigma in [1.0, 4.0, 16.0, 64.0]:
        copies = [img_np.copy() for _ in range(iterations)]
        start = time.time()
        for img in copies:
            boxgauss.blur(img, sigma)
        boxgauss_time = (time.time() - start) / iterations

        start = time.time()
        for _ in range(iterations):
            cv2.GaussianBlur(img_np, (0, 0), sigma)
        opencv_time = (time.time() - start) / iterations

        radii = boxgauss.plan_boxes(sigma).radii
        print(
            f"sigma={sigma:<6} radii={str(radii):<14} "
            f"boxgauss: {boxgauss_time:.4f}s  OpenCV: {opencv_time:.4f}s"
        )

    print("-" * 30)


if __name__ == "__main__":
    print("=== Gaussian Blur ===")
    benchmark_blur(size=(1024, 1024))
    benchmark_blur(size=(2048, 2048))
    benchmark_blur(size=(4096, 4096), iterations=3)

    print("\n=== Radius Independence ===")
    benchmark_radius_sweep(size=(1024, 1024))
