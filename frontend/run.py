"""
Run script for the FrameBOX web frontend
"""
import logging
import os

from framebox_web import app

logging.basicConfig(level=logging.INFO)

if __name__ == '__main__':
    app.run(
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
        port=int(os.getenv('PORT', '5000')),
        host='0.0.0.0'
    )
