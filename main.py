# NOTE: For displaying the parsed image in a GUI,
#       please download PyQt5.
#
# Installation (in terminal):
#   pip install PyQt5
import logging
import sys
from PyQt5.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QPushButton, QLabel,
    QFileDialog, QTextEdit, QSlider, QHBoxLayout, QCheckBox
)
from PyQt5.QtGui import QPixmap, QImage, qRgb
from PyQt5.QtCore import Qt
from bmp_parser import BMPParser
from bmp_errors import BMPError
from negative import negate_bitmap
import bmp_writer

DEFAULT_OUTPUT_PATH = "temp_file.bmp"


class BMPViewer(QWidget):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("BMP Negative")
        self.resize(700, 500)

        # Decoded image and its negative
        self.bitmap = None
        self.negative = None
        self.image_width = 0
        self.image_height = 0

        self.show_negative = True
        self.scale = 1.0

        layout = QVBoxLayout()

        top_layout = QHBoxLayout()

        # Button to open BMP file
        self.open_button = QPushButton("Open BMP File")
        self.open_button.setFixedSize(150, 50)
        self.open_button.clicked.connect(self.open_file)
        top_layout.addWidget(self.open_button)

        # Button to save the negative
        self.save_button = QPushButton("Save Negative")
        self.save_button.setFixedSize(150, 50)
        self.save_button.setEnabled(False)
        self.save_button.clicked.connect(self.save_file)
        top_layout.addWidget(self.save_button)

        top_layout.addStretch()

        # Switch the preview between original and negative
        self.negative_button = QCheckBox("Negative")
        self.negative_button.setChecked(True)
        self.negative_button.clicked.connect(self.toggle_negative)
        top_layout.addWidget(self.negative_button)

        layout.addLayout(top_layout)

        # Label to display the image
        self.image_label = QLabel("No Image Loaded")
        self.image_label.setStyleSheet("border: 1px solid black; background: white;")
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setFixedSize(700, 400)
        layout.addWidget(self.image_label)

        # Text box to display BMP metadata
        self.metadata_box = QTextEdit("No Metadata Loaded")
        self.metadata_box.setMinimumHeight(150)
        self.metadata_box.setReadOnly(True)
        layout.addWidget(self.metadata_box)

        # Slider for scaling the image
        self.scale_slider = QSlider(Qt.Horizontal)
        self.scale_slider.setRange(1, 100)
        self.scale_slider.setValue(100)
        self.scale_slider.valueChanged.connect(self.update_image)
        layout.addWidget(QLabel("Scale"))
        layout.addWidget(self.scale_slider)

        self.setLayout(layout)

    def open_file(self):
        filepath, _ = QFileDialog.getOpenFileName(self, "Open BMP File", "", "BMP Files (*.bmp)")
        if not filepath:
            return
        self.load_file(filepath)

    def load_file(self, filepath):
        parser = BMPParser(filepath)
        try:
            parser.load()
        except (BMPError, OSError) as e:
            self.metadata_box.setText(f"ERROR: Could not open {filepath}\n{e}")
            return False

        # Display metadata
        meta_text = ""
        for k, v in parser.metadata.items():
            meta_text += f"{k}: {v}\n"
        self.metadata_box.setText(meta_text)

        self.bitmap = parser.bitmap
        self.negative = negate_bitmap(parser.bitmap)
        self.image_width = parser.metadata["width"]
        self.image_height = parser.metadata["height"]
        self.save_button.setEnabled(True)

        self.update_image()
        return True

    def current_pixels(self):
        if self.bitmap is None:
            return None
        if self.show_negative:
            return self.negative.pixels
        return self.bitmap.pixels

    # Update image display based on settings
    def update_image(self):
        grid = self.current_pixels()
        if grid is None:
            return

        self.scale = self.scale_slider.value() / 100.0

        new_w = max(1, int(self.image_width * self.scale))
        new_h = max(1, int(self.image_height * self.scale))

        image = QImage(new_w, new_h, QImage.Format_RGB32)

        for y in range(new_h):
            # Grid row 0 is the bottom of the picture
            src_y = self.image_height - 1 - min(int(y / self.scale), self.image_height - 1)
            for x in range(new_w):
                src_x = min(int(x / self.scale), self.image_width - 1)
                pixel = grid.get(src_y, src_x)
                image.setPixel(x, y, qRgb(pixel.red, pixel.green, pixel.blue))

        # Show updated image
        pixmap = QPixmap.fromImage(image)
        self.image_label.setPixmap(pixmap)

    def toggle_negative(self):
        self.show_negative = self.negative_button.isChecked()
        self.update_image()

    def save_file(self):
        if self.negative is None:
            return

        output_filepath, _ = QFileDialog.getSaveFileName(
            self, "Save negative", DEFAULT_OUTPUT_PATH, "BMP Files (*.bmp)"
        )
        if not output_filepath:
            return
        self.save_negative(output_filepath)

    def save_negative(self, output_filepath):
        try:
            size = bmp_writer.save(self.negative, output_filepath)
        except OSError as e:
            self.metadata_box.append(f"ERROR: Could not write {output_filepath}: {e}")
            return False

        self.metadata_box.append(f"Negative saved to {output_filepath}")
        self.metadata_box.append(f"Size: {size} bytes")
        return True


def main():
    logging.basicConfig(format="%(name)s -- %(message)s", level=logging.WARNING)
    app = QApplication(sys.argv)
    viewer = BMPViewer()
    viewer.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
