"""Parser for ROS 2 .msg files and the msggen struct definition generator."""