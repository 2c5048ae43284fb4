import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), "src"))

from ecovision.config import DEFAULT_CONFIG_PATH, write_settings_template


def generate_excel(output_file: str = DEFAULT_CONFIG_PATH):
    print(f"Generating {output_file}...")
    write_settings_template(output_file)
    print("Done.")


if __name__ == "__main__":
    generate_excel(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH)
