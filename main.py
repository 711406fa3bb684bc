from camera_preview.main import main

# ==============================================================================
#                       CAMERA PREVIEW DEMO
# ==============================================================================
# Run from the project root: python main.py
# Fetch the optional face model first with: python download_model.py

if __name__ == "__main__":
    main()
