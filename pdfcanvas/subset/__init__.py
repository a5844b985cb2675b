"""Font subsetting through the external hb-subset program."""