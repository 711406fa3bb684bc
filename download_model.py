import urllib.request
import os

model_url = "https://storage.googleapis.com/mediapipe-models/face_detector/blaze_face_short_range/float16/1/blaze_face_short_range.tflite"
save_path = "assets/blaze_face_short_range.tflite"

if not os.path.exists("assets"):
    os.makedirs("assets")

if not os.path.exists(save_path):
    print(f"Downloading Face Detector model to {save_path}...")
    urllib.request.urlretrieve(model_url, save_path)
    print("Download complete.")
else:
    print("Model already exists.")
