# PawFam Storefront
