"""用户界面层."""
