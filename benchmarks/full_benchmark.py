import time
import os
import glob
import cv2
import numpy as np
import boxgauss
import matplotlib.pyplot as plt
from PIL import Image, ImageFilter

IMAGES_DIR = "benchmarks/images"
OUTPUT_DIR = "benchmarks/results"

SIGMAS = [1.0, 2.0, 4.0, 8.0, 16.0, 32.0]

# Ensure output directories exist
for sub in ["raw_speed", "quality"]:
    path = os.path.join(OUTPUT_DIR, sub, "outputs")
    if not os.path.exists(path):
        os.makedirs(path)


def calculate_psnr(img1, img2):
    mse = np.mean((img1.astype(np.float64) - img2.astype(np.float64)) ** 2)
    if mse == 0:
        return 100
    PIXEL_MAX = 255.0
    return 20 * np.log10(PIXEL_MAX / np.sqrt(mse))


def load_rgba(image_path):
    original_cv2 = cv2.imread(image_path, cv2.IMREAD_UNCHANGED)
    if original_cv2 is None:
        return None

    # Standardize to RGBA
    if len(original_cv2.shape) == 2:
        return cv2.cvtColor(original_cv2, cv2.COLOR_GRAY2RGBA)
    if original_cv2.shape[2] == 3:
        return cv2.cvtColor(original_cv2, cv2.COLOR_BGR2RGBA)
    return cv2.cvtColor(original_cv2, cv2.COLOR_BGRA2RGBA)


# ==================================================================================
# SUITE 1: RAW SPEED
# Same sigma for every library, time per call
# ==================================================================================
def run_raw_speed_test(image_path, filename, sigma=4.0):
    print(f"\n[Raw Speed] Processing {filename}...")

    img_rgba = load_rgba(image_path)
    if img_rgba is None:
        return None

    img_pil = Image.fromarray(img_rgba)
    h, w = img_rgba.shape[:2]
    megapixels = (w * h) / 1_000_000

    # --- Settings ---
    ITERATIONS = 10
    # Reduce iterations for huge images
    if megapixels > 20:
        ITERATIONS = 3

    # 1. boxgauss
    copies = [img_rgba.copy() for _ in range(ITERATIONS)]
    start = time.time()
    for img in copies:
        boxgauss.blur(img, sigma)
    t_box = (time.time() - start) / ITERATIONS
    res_box = copies[0]

    # 2. OpenCV
    start = time.time()
    for _ in range(ITERATIONS):
        res_cv2 = cv2.GaussianBlur(img_rgba, (0, 0), sigma)
    t_cv2 = (time.time() - start) / ITERATIONS

    # 3. Pillow
    if megapixels < 25:
        start = time.time()
        for _ in range(ITERATIONS):
            res_pil = np.array(img_pil.filter(ImageFilter.GaussianBlur(radius=sigma)))
        t_pil = (time.time() - start) / ITERATIONS
    else:
        t_pil = 0
        res_pil = None

    # Save outputs
    base = os.path.splitext(filename)[0]
    out_path = os.path.join(OUTPUT_DIR, "raw_speed", "outputs", base)
    if not os.path.exists(out_path):
        os.makedirs(out_path)

    cv2.imwrite(f"{out_path}/boxgauss.png", cv2.cvtColor(res_box, cv2.COLOR_RGBA2BGRA))
    cv2.imwrite(f"{out_path}/opencv.png", cv2.cvtColor(res_cv2, cv2.COLOR_RGBA2BGRA))
    if res_pil is not None:
        cv2.imwrite(
            f"{out_path}/pillow.png", cv2.cvtColor(res_pil, cv2.COLOR_RGBA2BGRA)
        )

    print(f"  boxgauss: {t_box * 1000:.2f} ms")
    print(f"  OpenCV:   {t_cv2 * 1000:.2f} ms")
    if t_pil > 0:
        print(f"  Pillow:   {t_pil * 1000:.2f} ms")

    return {
        "name": filename,
        "mp": megapixels,
        "t_box": t_box,
        "t_cv2": t_cv2,
        "t_pil": t_pil,
    }


# ==================================================================================
# SUITE 2: QUALITY AND RADIUS INDEPENDENCE
# boxgauss vs OpenCV's exact Gaussian across a range of sigmas
# ==================================================================================
def run_quality_test(image_path, filename):
    print(f"\n[Quality] Processing {filename}...")

    img_rgba = load_rgba(image_path)
    if img_rgba is None:
        return None

    h, w = img_rgba.shape[:2]
    megapixels = (w * h) / 1_000_000

    rows = []
    for sigma in SIGMAS:
        res_box = img_rgba.copy()
        start = time.time()
        boxgauss.blur(res_box, sigma)
        t_box = time.time() - start

        start = time.time()
        res_cv2 = cv2.GaussianBlur(img_rgba, (0, 0), sigma, borderType=cv2.BORDER_REPLICATE)
        t_cv2 = time.time() - start

        psnr = calculate_psnr(res_cv2, res_box)
        boxes = boxgauss.plan_boxes(sigma)
        rows.append(
            {
                "sigma": sigma,
                "effective_sigma": boxes.effective_sigma,
                "t_box": t_box,
                "t_cv2": t_cv2,
                "psnr": psnr,
            }
        )
        print(
            f"  sigma={sigma:<5} (boxes {boxes.widths}, effective {boxes.effective_sigma:.2f}): "
            f"boxgauss {t_box:.4f}s  OpenCV {t_cv2:.4f}s  PSNR {psnr:.2f} dB"
        )

    return {"name": filename, "mp": megapixels, "rows": rows}


def print_raw_summary_table(results):
    results.sort(key=lambda x: x["mp"])
    print("\n" + "=" * 70)
    print(" SUITE 1 SUMMARY: RAW SPEED (Time per Call in ms)")
    print("-" * 70)
    print(f"{'Image':<20} | {'MP':<6} | {'boxgauss':<10} | {'OpenCV':<10} | {'Pillow':<10}")
    print("-" * 70)
    for r in results:
        t_box = r["t_box"] * 1000
        t_cv = r["t_cv2"] * 1000
        t_pil = r["t_pil"] * 1000 if r["t_pil"] > 0 else 0
        pil_str = f"{t_pil:.2f}" if t_pil > 0 else "N/A"

        print(
            f"{r['name']:<20} | {r['mp']:<6.2f} | {t_box:<10.2f} | {t_cv:<10.2f} | {pil_str:<10}"
        )
    print("=" * 70)


def print_quality_summary_table(results):
    results.sort(key=lambda x: x["mp"])
    print("\n" + "=" * 70)
    print(" SUITE 2 SUMMARY: QUALITY (PSNR vs OpenCV in dB)")
    print("-" * 70)
    header = " | ".join(f"s={s:<5}" for s in SIGMAS)
    print(f"{'Image':<20} | {header}")
    print("-" * 70)
    for r in results:
        values = " | ".join(f"{row['psnr']:<7.2f}" for row in r["rows"])
        print(f"{r['name']:<20} | {values}")
    print("=" * 70)


def plot_raw_speed(results):
    results.sort(key=lambda x: x["mp"])
    names = [r["name"] for r in results]
    t_box = [r["t_box"] * 1000 for r in results]
    t_cv2 = [r["t_cv2"] * 1000 for r in results]
    t_pil = [r["t_pil"] * 1000 for r in results]

    x = np.arange(len(names))
    width = 0.25

    fig, ax = plt.subplots(figsize=(15, 8))
    ax.bar(x - width, t_box, width, label="boxgauss", color="#4CAF50", edgecolor="black")
    ax.bar(x, t_cv2, width, label="OpenCV", color="#2196F3", edgecolor="black")
    ax.bar(x + width, t_pil, width, label="Pillow", color="#FFC107", edgecolor="black")

    ax.set_ylabel("Time per Call (ms)")
    ax.set_title("Raw Speed Test: Same Sigma")
    ax.set_xticks(x)
    ax.set_xticklabels(names, rotation=45, ha="right")
    ax.legend()
    ax.grid(axis="y", linestyle="--", alpha=0.3)
    plt.tight_layout()
    plt.savefig(os.path.join(OUTPUT_DIR, "raw_speed", "chart.png"), dpi=300)


def plot_quality(results):
    fig, (ax_time, ax_psnr) = plt.subplots(1, 2, figsize=(16, 7))
    for r in results:
        sigmas = [row["sigma"] for row in r["rows"]]
        ax_time.plot(sigmas, [row["t_box"] for row in r["rows"]], marker="o", label=r["name"])
        ax_psnr.plot(sigmas, [row["psnr"] for row in r["rows"]], marker="s", label=r["name"])

    ax_time.set_xscale("log", base=2)
    ax_time.set_xlabel("Sigma")
    ax_time.set_ylabel("boxgauss time (s)")
    ax_time.set_title("Cost vs Sigma")
    ax_time.grid(True, linestyle="--", alpha=0.3)

    ax_psnr.set_xscale("log", base=2)
    ax_psnr.set_xlabel("Sigma")
    ax_psnr.set_ylabel("PSNR vs OpenCV (dB)")
    ax_psnr.set_title("Approximation Quality")
    ax_psnr.grid(True, linestyle="--", alpha=0.3)
    ax_psnr.legend()

    plt.tight_layout()
    plt.savefig(os.path.join(OUTPUT_DIR, "quality", "chart.png"), dpi=300)


def run_suite():
    types = ("*.png", "*.jpg", "*.jpeg")
    files = []
    for ext in types:
        files.extend(glob.glob(os.path.join(IMAGES_DIR, ext)))
    if not files:
        return

    # Suite 1
    print("\n" + "=" * 50)
    print(" SUITE 1: RAW SPEED")
    print("=" * 50)
    raw_results = []
    for f in files:
        res = run_raw_speed_test(f, os.path.basename(f))
        if res:
            raw_results.append(res)
    print_raw_summary_table(raw_results)
    plot_raw_speed(raw_results)

    # Suite 2
    print("\n" + "=" * 50)
    print(" SUITE 2: QUALITY AND RADIUS INDEPENDENCE")
    print("=" * 50)
    quality_results = []
    for f in files:
        res = run_quality_test(f, os.path.basename(f))
        if res:
            quality_results.append(res)
    print_quality_summary_table(quality_results)
    plot_quality(quality_results)

    print("\nAll Benchmarks Completed.")
    print(
        f"Charts saved to {OUTPUT_DIR}/raw_speed/chart.png and {OUTPUT_DIR}/quality/chart.png"
    )


if __name__ == "__main__":
    run_suite()
